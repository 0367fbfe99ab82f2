"""Command line interface (see numbersense.cli.main)."""
