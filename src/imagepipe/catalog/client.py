# catalog/client.py
from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote, urljoin

from ..errors import AlreadyExistsError, CatalogError, NotFoundError
from .objects import API_VERSION, ImageStream, ImageStreamTag, to_payload


class CatalogClient(ABC):
    """
    CRUD over image streams and their tags.

    Implementations raise AlreadyExistsError from create calls when the
    object is present, NotFoundError from get/delete calls when it is
    absent, and CatalogError for every other failure.
    """

    @abstractmethod
    def create_image_stream(self, stream: ImageStream) -> ImageStream:
        ...

    @abstractmethod
    def get_image_stream(self, namespace: str, name: str) -> ImageStream:
        ...

    @abstractmethod
    def create_image_stream_tag(self, tag: ImageStreamTag) -> ImageStreamTag:
        ...

    @abstractmethod
    def get_image_stream_tag(self, namespace: str, name: str) -> ImageStreamTag:
        """`name` is `stream:tag`."""

    @abstractmethod
    def delete_image_stream_tag(self, namespace: str, name: str) -> None:
        ...


class HTTPCatalogClient(CatalogClient):
    """REST client for the image.openshift.io API of a cluster."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        *,
        timeout: float = 30.0,
        verify_tls: bool = True,
    ):
        """
        Initialize catalog client.

        Args:
            base_url: API server URL (e.g., "https://api.cluster.example.com:6443")
            token: Optional bearer token
            timeout: Seconds before a single call is abandoned
            verify_tls: If False, skip server certificate verification
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._ssl_context: Optional[ssl.SSLContext] = None
        if not verify_tls:
            self._ssl_context = ssl.create_default_context()
            self._ssl_context.check_hostname = False
            self._ssl_context.verify_mode = ssl.CERT_NONE

    def _path(self, namespace: str, resource: str, name: Optional[str] = None) -> str:
        path = f"/apis/{API_VERSION}/namespaces/{quote(namespace, safe='')}/{resource}"
        if name is not None:
            path += "/" + quote(name, safe=":")
        return path

    def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        target: str,
        data: Optional[dict] = None,
    ) -> dict:
        """
        Make an HTTP request to the API server.

        Returns:
            Parsed JSON response as dictionary

        Raises:
            AlreadyExistsError: on HTTP 409
            NotFoundError: on HTTP 404
            CatalogError: on any other failure, including dropped connections
        """
        url = urljoin(self.base_url + "/", path.lstrip("/"))

        req_headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.token:
            req_headers["Authorization"] = f"Bearer {self.token}"

        req_data = None
        if data is not None:
            req_data = json.dumps(data).encode("utf-8")

        req = urllib.request.Request(url, data=req_data, headers=req_headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context) as response:
                response_data = response.read().decode("utf-8")
                if response_data:
                    return json.loads(response_data)
                return {}
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8") if e.fp else ""
            message = f"{e.code} {e.reason}. {error_body}".strip()
            if e.code == 409:
                raise AlreadyExistsError(operation, target, message, status=e.code) from e
            if e.code == 404:
                raise NotFoundError(operation, target, message, status=e.code) from e
            raise CatalogError(operation, target, message, status=e.code) from e
        except urllib.error.URLError as e:
            raise CatalogError(operation, target, f"network error: {e.reason}") from e
        except TimeoutError as e:
            raise CatalogError(operation, target, f"timed out after {self.timeout}s") from e
        except (http.client.HTTPException, OSError) as e:
            # connection dropped while reading the response
            raise CatalogError(operation, target, f"connection error: {e!r}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(operation, target, f"invalid JSON response: {e}") from e

    # ------------------------------------------------------------------
    # Image streams
    # ------------------------------------------------------------------

    def create_image_stream(self, stream: ImageStream) -> ImageStream:
        data = self._request(
            "POST",
            self._path(stream.metadata.namespace, "imagestreams"),
            operation="create imagestream",
            target=stream.ref,
            data=to_payload(stream),
        )
        return ImageStream.model_validate(data)

    def get_image_stream(self, namespace: str, name: str) -> ImageStream:
        data = self._request(
            "GET",
            self._path(namespace, "imagestreams", name),
            operation="get imagestream",
            target=f"{namespace}/{name}",
        )
        return ImageStream.model_validate(data)

    # ------------------------------------------------------------------
    # Image stream tags
    # ------------------------------------------------------------------

    def create_image_stream_tag(self, tag: ImageStreamTag) -> ImageStreamTag:
        data = self._request(
            "POST",
            self._path(tag.metadata.namespace, "imagestreamtags"),
            operation="create imagestreamtag",
            target=tag.ref,
            data=to_payload(tag),
        )
        return ImageStreamTag.model_validate(data)

    def get_image_stream_tag(self, namespace: str, name: str) -> ImageStreamTag:
        data = self._request(
            "GET",
            self._path(namespace, "imagestreamtags", name),
            operation="get imagestreamtag",
            target=f"{namespace}/{name}",
        )
        return ImageStreamTag.model_validate(data)

    def delete_image_stream_tag(self, namespace: str, name: str) -> None:
        self._request(
            "DELETE",
            self._path(namespace, "imagestreamtags", name),
            operation="delete imagestreamtag",
            target=f"{namespace}/{name}",
        )
