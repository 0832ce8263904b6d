"""CLI — interactive command loop and console display."""
