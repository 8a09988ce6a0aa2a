"""
Demo script end to end.
"""

import argparse
import json

import pytest

from scripts.demo import build_registry, main, parse_query


def test_build_registry_populates_demo_collections():
    registry = build_registry()

    assert registry.list_collections() == ["LegalFiles", "NotaryDocuments"]
    assert len(registry.get_collection("NotaryDocuments")) == 2
    assert len(registry.get_collection("LegalFiles")) == 2


def test_json_output(capsys):
    assert main(["--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["query"] == [1.0, 1.0, 1.0]
    assert payload["top_k"] == 3

    notary = payload["results"]["NotaryDocuments"]
    assert len(notary) == 2
    assert notary[0]["score"] == pytest.approx(0.9869, abs=1e-4)
    assert notary[1]["score"] == pytest.approx(0.9258, abs=1e-4)

    legal = payload["results"]["LegalFiles"]
    assert len(legal) == 2
    assert legal[0]["score"] == pytest.approx(legal[1]["score"])


def test_text_output(capsys):
    assert main([]) == 0

    out = capsys.readouterr().out
    assert "Results in 'NotaryDocuments':" in out
    assert "Similarity: 0.9869" in out
    assert "Similarity: 0.5774" in out


def test_missing_collection_reported(capsys):
    assert main(["--collection", "Archive"]) == 0
    assert "No collection named 'Archive'." in capsys.readouterr().out


def test_mismatched_query_has_no_matches(capsys):
    assert main(["--query", "1,1"]) == 0
    assert "(no matching documents)" in capsys.readouterr().out


def test_negative_top_k_rejected(capsys):
    assert main(["--top-k", "-1"]) == 1
    assert "--top-k" in capsys.readouterr().err


def test_parse_query():
    assert parse_query("1, 2.5,-3") == [1.0, 2.5, -3.0]
    with pytest.raises(argparse.ArgumentTypeError):
        parse_query("1,a")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
