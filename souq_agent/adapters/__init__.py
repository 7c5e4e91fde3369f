"""외부 연동 어댑터 (공급사 API)"""
from .supplier_client import (
    SupplierClient,
    AutoDropClient,
    MakhazenClient,
    MockSupplierClient,
    create_supplier_clients,
)

__all__ = [
    "SupplierClient",
    "AutoDropClient",
    "MakhazenClient",
    "MockSupplierClient",
    "create_supplier_clients",
]
