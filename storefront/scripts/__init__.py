# Command line entrypoints
