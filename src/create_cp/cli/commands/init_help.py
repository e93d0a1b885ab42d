"""Shared help text for the init command."""

INIT_COMMAND_DOC = """
Create a new project by cloning a starter template.

Interactive Mode (default):
- Prompts for the project name (skipped when TARGET_DIR is given)
- Asks before clearing a non-empty target directory
- Asks for a package name when the project name is not a valid one
- Lets you pick an owner, then one of its templates

Templates (--template / -t):
vitesse, vitesse-lite, starter-ts, starter-wechat.
An unknown name falls back to the interactive owner selection.

Examples:
  create-cp                          # Fully interactive
  create-cp my-app                   # Skip the project name prompt
  create-cp my-app -t vitesse-lite   # Skip template selection too
  create-cp . -t starter-ts          # Use the current directory

After cloning, package.json is renamed to the chosen package name and the
install/dev commands for the detected package manager are printed.
"""
