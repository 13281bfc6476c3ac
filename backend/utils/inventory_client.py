# backend/utils/inventory_client.py
import httpx
import logging
import mimetypes
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# An image is either a path on disk or an already-built (filename, bytes, content_type) tuple
ImageInput = Union[str, Path, Tuple[str, bytes, str]]


class InventoryAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class InventoryClient:
    """Talks to the inventory API the same way the shop app does.

    Pass ``client`` to reuse an existing ``httpx.Client`` (tests hand in the
    FastAPI ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None, timeout: float = 10.0):
        # Initialize the API address, defaulting to the local development server
        self.base_url = (base_url or os.getenv("INVENTORY_API_URL", "http://localhost:30032")).rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self):
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _check(self, response: httpx.Response) -> Any:
        if response.is_error:
            try:
                message = response.json().get("error") or response.text
            except ValueError:
                message = response.text
            logger.error("Inventory API error %s: %s", response.status_code, message)
            raise InventoryAPIError(response.status_code, str(message))
        return response.json()

    @staticmethod
    def _form(name=None, price=None, quantity=None) -> Dict[str, str]:
        data = {}
        if name is not None:
            data["name"] = name
        if price is not None:
            data["price"] = str(price)
        if quantity is not None:
            data["quantity"] = str(quantity)
        return data

    @staticmethod
    def _files(image: Optional[ImageInput]):
        if image is None:
            return None
        if isinstance(image, (str, Path)):
            path = Path(image)
            content_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
            return {"Image": (path.name, path.read_bytes(), content_type)}
        return {"Image": image}

    def health(self) -> Dict[str, Any]:
        return self._check(self.client.get("/api"))

    def list_products(self) -> List[Dict[str, Any]]:
        return self._check(self.client.get("/api/products"))

    def get_product(self, product_id: int) -> Optional[Dict[str, Any]]:
        response = self.client.get(f"/api/products/{product_id}")
        if response.status_code == 404:
            return None
        return self._check(response)

    def create_product(self, name: str, price=None, quantity=None, image: Optional[ImageInput] = None) -> Dict[str, Any]:
        response = self.client.post(
            "/api/products",
            data=self._form(name, price, quantity),
            files=self._files(image),
        )
        return self._check(response)["product"]

    def update_product(self, product_id: int, name=None, price=None, quantity=None, image: Optional[ImageInput] = None) -> Dict[str, Any]:
        response = self.client.put(
            f"/api/products/{product_id}",
            data=self._form(name, price, quantity),
            files=self._files(image),
        )
        return self._check(response)["product"]

    def delete_product(self, product_id: int) -> bool:
        response = self.client.delete(f"/api/products/{product_id}")
        if response.status_code == 404:
            return False
        self._check(response)
        return True
