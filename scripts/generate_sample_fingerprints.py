#!/usr/bin/env python3
"""
Generate sample_fingerprints.json from sample_payloads.json.
Runs every sample through the fingerprinting engine in-memory.
Usage: python scripts/generate_sample_fingerprints.py
"""

import json
import logging
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from idempofy import collision_risk, fingerprint
from idempofy.config import settings
from idempofy.errors import IdempofyError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    examples_dir = Path(__file__).resolve().parent.parent / "examples"
    payloads_path = examples_dir / "sample_payloads.json"
    output_path = examples_dir / "sample_fingerprints.json"

    if not payloads_path.exists():
        logger.error("%s not found", payloads_path)
        sys.exit(1)

    with open(payloads_path) as f:
        samples = json.load(f)

    results = []
    for sample in samples:
        try:
            result = fingerprint(sample["payload"], sample.get("config"))
        except IdempofyError as exc:
            logger.error("Sample %s failed: %s", sample.get("name"), exc)
            continue
        entry = result.model_dump(by_alias=True, exclude_none=True)
        entry["name"] = sample.get("name")
        entry["collisionRisk"] = collision_risk(result.fingerprint)
        results.append(entry)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)
        f.write("\n")

    logger.info("Wrote %d fingerprints to %s", len(results), output_path)


if __name__ == "__main__":
    main()
