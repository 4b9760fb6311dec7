from myumkm.setup.ioc.container import (
    AppProvider,
    InMemoryStorageProvider,
    create_container,
)

__all__ = ["AppProvider", "InMemoryStorageProvider", "create_container"]
