"""Command line front-ends for framestack."""
