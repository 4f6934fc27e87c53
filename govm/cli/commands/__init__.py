"""Command implementations for the govm CLI; each module exposes run(args) -> int."""
