# ABOUTME: Subcommands of the bookland CLI, one module per command.
