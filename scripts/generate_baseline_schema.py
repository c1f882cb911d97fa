#!/usr/bin/env python3
"""
Generate the baseline OpenAPI schema used by the contract tests.

Usage:
    python -m scripts.generate_baseline_schema [output_path]
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_BASELINE_PATH = (
    Path(__file__).parent.parent / "tests" / "contract" / "baseline_schema.json"
)


def build_schema() -> Dict[str, Any]:
    """Render the OpenAPI document of the current app"""
    from src.app import app

    return app.openapi()


def generate_baseline_schema(output_path: Optional[Path] = None) -> Path:
    """Write the current schema to ``output_path`` and return the path"""
    baseline_path = output_path or DEFAULT_BASELINE_PATH

    logger.info("Generating OpenAPI schema from application...")
    schema = build_schema()

    baseline_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Writing baseline schema to {baseline_path}")
    with open(baseline_path, "w") as f:
        json.dump(schema, f, indent=2, sort_keys=True)

    operations = sum(len(methods) for methods in schema["paths"].values())
    print(f"Baseline schema saved to {baseline_path}")
    print(f"  Schema version: {schema['info']['version']}")
    print(f"  Paths: {len(schema['paths'])} ({operations} operations)")
    print(f"  Models: {len(schema.get('components', {}).get('schemas', {}))}")

    return baseline_path


if __name__ == "__main__":
    try:
        generate_baseline_schema(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
    except Exception as e:
        logger.error(f"Failed to generate baseline schema: {e}")
        raise
