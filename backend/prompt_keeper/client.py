"""HTTP client for the Prompt Keeper API.

Exposes the same method names as ``PromptLibrary`` so callers (and the
autosave helper) can work against a remote library the same way they work
against a local one.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from prompt_keeper.models.folder import FOLDER_COLORS, FolderRead
from prompt_keeper.models.preset import PresetRead
from prompt_keeper.models.prompt import PromptCreate, PromptRead, PromptRenderRead, PromptUpdate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:3001"


class PromptKeeperConnectionError(Exception):
    """Raised when the API cannot be reached."""


class PromptKeeperClient:
    """Synchronous wrapper around the REST endpoints.

    Non-2xx responses raise ``httpx.HTTPStatusError``, except the 404s of
    single-record reads and updates which come back as ``None``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        api_prefix: str = "/api",
        timeout: float = 10.0,
    ):
        # An injected client (e.g. FastAPI's TestClient) keeps its own base URL.
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.api_prefix = api_prefix.rstrip("/")

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "PromptKeeperClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.api_prefix}{path}"
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.error("Prompt Keeper API unreachable", extra={"method": method, "url": url})
            raise PromptKeeperConnectionError(f"{method} {url} failed: {exc}") from exc

    def _json(self, method: str, path: str, allow_missing: bool = False, **kwargs) -> Any:
        response = self._request(method, path, **kwargs)
        if allow_missing and response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    # --- Folders ---
    def list_folders(self) -> List[FolderRead]:
        return [FolderRead.model_validate(f) for f in self._json("GET", "/folders")]

    def create_folder(self, name: str, color: str = FOLDER_COLORS[0]) -> FolderRead:
        return FolderRead.model_validate(self._json("POST", "/folders", json={"name": name, "color": color}))

    def update_folder(self, folder) -> Optional[FolderRead]:
        payload = self._json(
            "PUT",
            f"/folders/{folder.id}",
            allow_missing=True,
            json={"name": folder.name, "color": folder.color},
        )
        return FolderRead.model_validate(payload) if payload else None

    def delete_folder(self, folder_id: str) -> None:
        self._json("DELETE", f"/folders/{folder_id}")

    # --- Prompts ---
    def list_prompts(
        self,
        folder_id: Optional[str] = None,
        tag: Optional[str] = None,
        query: Optional[str] = None,
    ) -> List[PromptRead]:
        params = {k: v for k, v in {"folder_id": folder_id, "tag": tag, "q": query}.items() if v}
        return [PromptRead.model_validate(p) for p in self._json("GET", "/prompts", params=params)]

    def get_prompt(self, prompt_id: str) -> Optional[PromptRead]:
        payload = self._json("GET", f"/prompts/{prompt_id}", allow_missing=True)
        return PromptRead.model_validate(payload) if payload else None

    def list_tags(self) -> List[str]:
        return self._json("GET", "/tags")

    def create_prompt(self, data: PromptCreate) -> PromptRead:
        return PromptRead.model_validate(self._json("POST", "/prompts", json=data.model_dump(mode="json")))

    def update_prompt(self, prompt) -> Optional[PromptRead]:
        """Replace a prompt; ``updated_at`` is stamped by the server."""
        body = PromptUpdate.model_validate(prompt, from_attributes=True).model_dump(mode="json")
        payload = self._json("PUT", f"/prompts/{prompt.id}", allow_missing=True, json=body)
        return PromptRead.model_validate(payload) if payload else None

    def delete_prompt(self, prompt_id: str) -> None:
        self._json("DELETE", f"/prompts/{prompt_id}")

    def render_prompt(self, prompt_id: str, values: Dict[str, str]) -> Optional[PromptRenderRead]:
        payload = self._json("POST", f"/prompts/{prompt_id}/render", allow_missing=True, json={"values": values})
        return PromptRenderRead.model_validate(payload) if payload else None

    # --- Presets ---
    def list_presets(self, prompt_id: Optional[str] = None) -> List[PresetRead]:
        params = {"prompt_id": prompt_id} if prompt_id is not None else {}
        return [PresetRead.model_validate(p) for p in self._json("GET", "/presets", params=params)]

    def create_preset(self, prompt_id: str, name: str, values: Dict[str, str]) -> PresetRead:
        payload = self._json("POST", "/presets", json={"prompt_id": prompt_id, "name": name, "values": values})
        return PresetRead.model_validate(payload)

    def delete_preset(self, preset_id: str) -> None:
        self._json("DELETE", f"/presets/{preset_id}")

    def info(self) -> Dict[str, Any]:
        return self._json("GET", "/info")
