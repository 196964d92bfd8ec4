from __future__ import annotations

from rest_framework.renderers import BaseRenderer

from modules.reports.exports import to_csv


class CSVRenderer(BaseRenderer):
    """Renders any JSON-like payload as flat ``key,value`` CSV."""

    media_type = "text/csv"
    format = "csv"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        if data is None:
            return b""
        return to_csv(data).encode(self.charset)
