"""ledgerport - spreadsheet import and export for a small expense ledger."""

__version__ = "0.1.0"


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from ledgerport.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
