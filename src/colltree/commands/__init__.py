"""Built-in CLI sub-commands for colltree.

This package groups the Typer sub-command modules that form the CLI's
command tree:

* :mod:`~colltree.commands.get` -- ID/Name tables of collections and listings.
* :mod:`~colltree.commands.describe` -- info, scripts, variables and item tree.
* :mod:`~colltree.commands.tree` -- the item tree on its own.
* :mod:`~colltree.commands.config` -- view and modify global settings.

Multi-command groups export a :class:`typer.Typer` sub-application; single
commands (``tree``) export a plain callback registered on the root app.
"""
