# cartsync/domain/errors.py


class RemoteCatalogError(Exception):
    """Bazowy blad zdalnego katalogu - zawsze konczy sie fallbackiem na dane lokalne."""


class RemoteUnreachable(RemoteCatalogError):
    """Brak polaczenia albo host nie rozwiazuje sie."""


class RemoteIOError(RemoteCatalogError):
    """Timeout lub inny blad transportu."""


class RemoteStatusError(RemoteCatalogError):
    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class RemoteEmptyBody(RemoteCatalogError):
    """Odpowiedz 2xx bez tresci albo z nieoczekiwanym JSON-em."""


class LocalStoreError(Exception):
    """Blad lokalnej bazy - nie jest polykany, idzie do wywolujacego."""
