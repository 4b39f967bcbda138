# src/volume_stats_exporter/collectors/kubelet_collector.py

"""
KubeletSummaryCollector fetches the node-local /stats/summary document and
decodes it into a StatsSummary.
"""

import logging
from typing import Optional

import httpx

from volume_stats_exporter.collectors.base_collector import BaseCollector
from volume_stats_exporter.core.config import Config
from volume_stats_exporter.core.exceptions import DecodeError, TransportError, UpstreamStatusError
from volume_stats_exporter.models.summary import PREVIEW_LENGTH, StatsSummary, decode_summary
from volume_stats_exporter.utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)


class KubeletSummaryCollector(BaseCollector):
    """
    Polls the kubelet stats summary API with an optional bearer token.
    """

    def __init__(self, settings: Config, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.url = settings.STATS_SUMMARY_URL
        self.token_path = settings.TOKEN_PATH
        self.debug = settings.DEBUG
        self._client = client or get_async_http_client(settings)
        self._token_warning_logged = False

    def _read_token(self) -> Optional[str]:
        """
        Reads the bearer token from disk.

        The file is read on every request so rotated service account tokens
        are picked up without a restart. An unreadable file degrades to
        unauthenticated requests.
        """
        if not self.token_path:
            return None
        try:
            with open(self.token_path, "r", encoding="utf-8") as f:
                token = f.read().strip()
            if not _is_valid_header_value(token):
                raise ValueError("token contains non-ASCII or control characters")
        except (OSError, ValueError) as e:
            # UnicodeDecodeError is a ValueError.
            if not self._token_warning_logged:
                logger.warning(
                    "Failed to read service account token from %s, proceeding without authentication: %s",
                    self.token_path,
                    e,
                )
                self._token_warning_logged = True
            else:
                logger.debug("Service account token at %s still unreadable: %s", self.token_path, e)
            return None

        if self._token_warning_logged:
            logger.info("Service account token at %s is readable again.", self.token_path)
            self._token_warning_logged = False
        return token or None

    async def fetch(self) -> bytes:
        """
        Performs one GET against the stats summary endpoint.

        Returns the raw response body on HTTP 200.

        Raises:
            TransportError: On network, timeout or TLS failures.
            UpstreamStatusError: On any non-200 status code.
        """
        headers = {}
        token = self._read_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("Fetching stats from kubelet at %s", self.url)
        try:
            response = await self._client.get(self.url, headers=headers)
        except httpx.RequestError as e:
            raise TransportError(f"failed to fetch stats from {self.url}: {e!r}") from e

        if response.status_code != httpx.codes.OK:
            body = response.text
            logger.error(
                "Unexpected status code from kubelet: %d, response body: %s",
                response.status_code,
                body,
            )
            raise UpstreamStatusError(response.status_code, body)

        body = response.content
        if self.debug:
            logger.debug("Raw kubelet API response (%d bytes): %s", len(body), body.decode("utf-8", errors="replace"))
        return body

    async def collect(self) -> StatsSummary:
        """
        Fetches and decodes one stats summary.

        Raises:
            TransportError, UpstreamStatusError, DecodeError
        """
        raw = await self.fetch()
        try:
            summary = decode_summary(raw)
        except DecodeError:
            logger.error(
                "Failed to decode kubelet response, preview: %s",
                raw[:PREVIEW_LENGTH].decode("utf-8", errors="replace"),
            )
            raise

        logger.debug(
            "Successfully parsed stats response: node=%s, %d pod(s)",
            summary.node_name,
            len(summary.pods),
        )
        if self.debug:
            for index, pod in enumerate(summary.pods):
                logger.debug(
                    "Pod %d from kubelet API: %s/%s (uid=%s, %d volume(s))",
                    index,
                    pod.pod_ref.namespace,
                    pod.pod_ref.name,
                    pod.pod_ref.uid,
                    len(pod.volumes),
                )
        return summary

    async def close(self):
        await self._client.aclose()


def _is_valid_header_value(token: str) -> bool:
    # httpx encodes header values as ASCII; control characters would break the header.
    return all(" " <= char <= "~" for char in token)
