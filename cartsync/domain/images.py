# cartsync/domain/images.py

PLACEHOLDER_IMAGE = "/static/img/placeholder.png"

#klucz z bazy -> plik w paczce statycznej
IMAGE_ASSETS = {
    "g502": "/static/img/g502.png",
    "g502x": "/static/img/g502x.png",
    "audi1": "/static/img/audi1.png",
    "pc": "/static/img/pc.png",
    "ps5": "/static/img/ps5.png",
    "sillagamer": "/static/img/sillagamer.png",
}


def resolve_image(image_ref: str | None) -> str:
    """Klucz zasobu -> sciezka, URL bez zmian, reszta -> placeholder."""
    if not image_ref:
        return PLACEHOLDER_IMAGE

    ref = image_ref.strip()
    if ref in IMAGE_ASSETS:
        return IMAGE_ASSETS[ref]
    if ref.startswith(("http://", "https://")):
        return ref
    return PLACEHOLDER_IMAGE
