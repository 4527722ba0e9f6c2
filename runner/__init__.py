"""Command-line runner: generate a workout and time it in the terminal."""
