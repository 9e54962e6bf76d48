"""
Print Shop Pricing Engine — Main Entry Point

Preview the pricing of a service record (CLI):
    python -m printshop_pricing preview path/to/service.json

Run as an API server (for the operator console):
    python -m printshop_pricing --serve
    # or: uvicorn printshop_pricing.api:app --reload --port 8000
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from printshop_pricing.config import get_settings
from printshop_pricing.models.schemas import AgentService
from printshop_pricing.pricing import compute_preview, lifecycle_state, needs_scaffold, scaffold, validate
from printshop_pricing.utils.logger import setup_logging


def preview(file_path: str) -> dict:
    """Load a service record, scaffold if needed, and log its price preview."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    raw = json.loads(Path(file_path).read_text(encoding="utf-8"))
    service = AgentService.model_validate(raw.get("data", raw) if isinstance(raw, dict) else raw)

    config = scaffold(service)
    result = validate(config)
    report = compute_preview(config)

    logger.info("-" * 60)
    logger.info(f"  Service:        {service.id}")
    logger.info(f"  State:          {lifecycle_state(service).value}")
    logger.info(f"  Scaffolded:     {needs_scaffold(service)}")
    logger.info(f"  Valid:          {result.valid}")
    for reason in result.reasons:
        logger.info(f"    ✗ {reason}")
    logger.info("-" * 60)

    logger.info("  Base pricing")
    for line in report.base_pricing:
        logger.info(f"    {line.name:<24} {line.display}")
    if not report.base_pricing:
        logger.info("    None selected")

    logger.info("  Options")
    for line in report.options:
        marker = "*" if line.is_default else " "
        logger.info(f"   {marker}{line.name:<24} {line.display}")
    if not report.options:
        logger.info("    None enabled")

    logger.info("  Specifics")
    for line in report.custom_specifications:
        logger.info(f"    {line.name:<24} {line.display}")
    if not report.custom_specifications:
        logger.info("    None added")
    logger.info("-" * 60)

    return {
        "pricingConfig": config.to_wire(),
        "validation": result.to_wire(),
        "preview": report.to_wire(),
    }


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("printshop_pricing.api:app", host=host, port=port, reload=get_settings().debug)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if "--serve" in args:
        serve()
        return 0
    if len(args) == 2 and args[0] == "preview":
        preview(args[1])
        return 0
    print(__doc__)
    return 2


if __name__ == "__main__":
    sys.exit(main())
