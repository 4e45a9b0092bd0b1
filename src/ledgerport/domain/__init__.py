"""Domain layer for ledgerport application."""

_SERVICES = {
    "AccountService": "ledgerport.domain.account",
    "TagService": "ledgerport.domain.reference",
    "UserService": "ledgerport.domain.reference",
    "ExpenseService": "ledgerport.domain.expense",
    "TransferService": "ledgerport.domain.transfer",
    "ImportService": "ledgerport.domain.batch_import",
    "ExportService": "ledgerport.domain.export",
}

__all__ = list(_SERVICES)


# Services are imported lazily; the database layer imports domain entities
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
