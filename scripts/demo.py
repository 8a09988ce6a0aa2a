#!/usr/bin/env python3
"""
Document search demo.

Builds two small collections, runs one cosine similarity query against each
and prints the ranked document ids.
"""

import argparse
import json
import sys
import uuid
from pathlib import Path

# Allow running from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from simsearch.core.config import validate_config
from simsearch.vector import CollectionRegistry

DEMO_COLLECTIONS = {
    "NotaryDocuments": [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]],
    "LegalFiles": [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
}


def build_registry():
    """Register the demo collections and fill them with freshly generated ids."""
    registry = CollectionRegistry()
    for name, vectors in DEMO_COLLECTIONS.items():
        registry.add_collection(name)
        for vector in vectors:
            registry.add_or_update(name, uuid.uuid4(), vector)
    return registry


def run_queries(registry, query, top_k, collections):
    """Search each collection; a missing collection maps to None."""
    return {name: registry.search_in_collection(name, query, top_k) for name in collections}


def parse_query(value):
    try:
        return [float(part) for part in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"query must be comma-separated numbers: {value!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run a cosine similarity search over the demo collections",
        prog="python scripts/demo.py"
    )
    parser.add_argument(
        "--query",
        type=parse_query,
        default=[1.0, 1.0, 1.0],
        help="Query vector as comma-separated numbers (default: 1,1,1)"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=3,
        help="Maximum results per collection (default: 3)"
    )
    parser.add_argument(
        "--collection",
        action="append",
        help="Collection to search; repeatable (default: all demo collections)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )
    args = parser.parse_args(argv)

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}", file=sys.stderr)
        return 1

    if args.top_k < 0:
        print("ERROR: --top-k must be >= 0", file=sys.stderr)
        return 1

    registry = build_registry()
    collections = args.collection or list(DEMO_COLLECTIONS)
    results = run_queries(registry, args.query, args.top_k, collections)

    if args.json:
        payload = {
            name: None if hits is None else [{"id": str(hit.id), "score": hit.score} for hit in hits]
            for name, hits in results.items()
        }
        print(json.dumps({"query": args.query, "top_k": args.top_k, "results": payload}, indent=2))
        return 0

    print(f"=== Search with query: {args.query} ===")
    for name, hits in results.items():
        if hits is None:
            print(f"\nNo collection named '{name}'.")
            continue
        print(f"\nResults in '{name}':")
        if not hits:
            print("  (no matching documents)")
        for doc_id, score in hits:
            print(f"  Document ID: {doc_id} - Similarity: {score:.4f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
