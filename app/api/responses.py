"""Response classes shared by the catalog API."""

import json
from typing import Any

from fastapi.responses import JSONResponse


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with two-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")
