"""Lambda container handler for the web application placeholder.

Instrumentation
---------------
* **aws_lambda_powertools.Logger** – structured JSON logging.
* **aws_lambda_powertools.event_handler.APIGatewayRestResolver** – routes
  API Gateway proxy events.
"""

from __future__ import annotations

import os
from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response, content_types
from aws_lambda_powertools.utilities.typing import LambdaContext

logger = Logger(service=os.environ.get("POWERTOOLS_SERVICE_NAME", "container-webapp"))
app = APIGatewayRestResolver()

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head><meta charset="utf-8"><title>{title}</title></head>
  <body><h1>{title}</h1><p>Served from a Lambda container image.</p></body>
</html>
"""


@app.get("/")
def index() -> Response:
    """Serve the landing page."""
    host = app.current_event.headers.get("Host", "localhost")
    return Response(
        status_code=200,
        content_type=content_types.TEXT_HTML,
        body=PAGE_TEMPLATE.format(title=host),
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@logger.inject_lambda_context(log_event=False)
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Lambda entry‑point for API Gateway proxy events.

    Parameters
    ----------
    event :
        API Gateway REST proxy event.
    context :
        Runtime context supplied by AWS Lambda.

    Returns:
    -------
    dict[str, Any]
        API Gateway proxy response.
    """
    return app.resolve(event, context)
