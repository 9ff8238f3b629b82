"""
Client for branding themes.

Themes are exchanged as zip archives of template files; single template files
can also be downloaded or replaced on their own.
"""

import io
import logging
import os
import zipfile
from pathlib import Path
from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params, pagination_param
from verifyctl.errors import InvalidInputError
from verifyctl.models.theme import Theme

logger = logging.getLogger(__name__)

OCTET_STREAM = "application/octet-stream"
ZIP = "application/zip"


class ThemeClient(ResourceClient):
    path = "v1.0/branding/themes"

    def list_themes(
        self,
        count: Optional[int] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ListPage[Theme]:
        pagination = pagination_param(page, limit)
        if count:
            pagination = "&".join(p for p in (f"count={count}", pagination) if p)
        return self._list(
            Theme,
            "get the themes",
            key="themeRegistrations",
            params=list_params(pagination=pagination),
            page=page,
            limit=limit,
        )

    def _download(self, url: str, action: str, params=None, accept: Optional[str] = None) -> bytes:
        headers = self._headers(accept=accept)
        if accept is None:
            headers.pop("Accept")
        response = self.http.get(url, headers=headers, params=params)
        self._check(response, action)
        return response.body

    def get_theme(self, theme_id: str, customized_only: bool = False) -> Tuple[bytes, str]:
        """
        Download a theme archive.

        Args:
            theme_id: Theme identifier
            customized_only: Only include template files that were customized

        Returns:
            The zip bytes and the theme URI
        """
        url = self._url(theme_id)
        params = {"customized_only": str(customized_only).lower()}
        return self._download(url, "get the theme", params=params, accept=OCTET_STREAM), url

    def get_file(self, theme_id: str, path: str) -> Tuple[bytes, str]:
        """Download one template file, ``path`` including the locale."""
        url = f"{self._url(theme_id)}/{path.lstrip('/')}"
        return self._download(url, "get the file"), url

    def update_theme(self, theme_id: str, archive: bytes) -> None:
        """Replace the theme with a zip archive of its template files."""
        files = {"files": ("theme.zip", archive, ZIP)}
        response = self.http.put(self._url(theme_id), headers=self._headers(accept="application/json"), files=files)
        self._check(response, "update the theme")

    def update_file(self, theme_id: str, path: str, content: bytes) -> None:
        """Replace one template file of the theme."""
        url = f"{self._url(theme_id)}/{path.lstrip('/')}"
        files = {"file": (os.path.basename(path), content, OCTET_STREAM)}
        response = self.http.put(url, headers=self._headers(accept="application/json"), files=files)
        self._check(response, "update the file")


def zip_directory(directory: Path) -> bytes:
    """Compress every file under ``directory`` into an in-memory zip archive."""
    directory = Path(directory)
    if not directory.is_dir():
        raise InvalidInputError(f"'{directory}' is not a directory")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for file_path in sorted(directory.rglob("*")):
            if file_path.is_file():
                archive.write(file_path, file_path.relative_to(directory).as_posix())
    logger.debug(f"Compressed {directory} into {buffer.tell()} bytes")
    return buffer.getvalue()


def unpack_zip(content: bytes, directory: Path) -> None:
    """Extract a theme archive into ``directory``, refusing paths that escape it."""
    directory = Path(directory).resolve()
    directory.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            for member in archive.infolist():
                target = (directory / member.filename).resolve()
                if target != directory and directory not in target.parents:
                    raise InvalidInputError(f"illegal file path in archive: {member.filename}")
            archive.extractall(directory)
    except zipfile.BadZipFile as e:
        raise InvalidInputError(f"the theme is not a valid zip archive: {e}") from e
