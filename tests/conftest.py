"""
Pytest configuration and fixtures for clause-tree.
"""

import json
import os

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

from clausetree.config import load_config
from clausetree.domain.passage import Passage
from clausetree_api.app import app


@pytest.fixture(scope="session")
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def config():
    """Default configuration."""
    return load_config()


@pytest.fixture
def passage():
    """Five-word passage: a main clause followed by a purpose clause."""
    return Passage.from_words("Test 1:1", ["Παρακαλῶ", "οὖν", "ὑμᾶς", "ἵνα", "πιστεύητε"])


@pytest.fixture
def main_clause():
    """Clause object covering words 0-2."""
    return {
        "id": "clause_1",
        "type": "MAIN",
        "wordIndices": [0, 1, 2],
        "mainVerbIndex": 0,
        "parentClauseId": None,
        "greekText": "Παρακαλῶ οὖν ὑμᾶς",
        "syntacticFunction": "Main exhortation",
    }


@pytest.fixture
def purpose_clause():
    """Clause object covering words 3-4, dependent on clause_1."""
    return {
        "id": "clause_2",
        "type": "SUBORDINATE_PURPOSE",
        "wordIndices": [3, 4],
        "mainVerbIndex": 4,
        "parentClauseId": "clause_1",
        "conjunction": "ἵνα",
        "greekText": "ἵνα πιστεύητε",
        "syntacticFunction": "Expresses the purpose of the exhortation",
    }


@pytest.fixture
def make_response():
    """Build raw response text from clause objects."""
    def _make(clauses, root="clause_1", description="Main clause with a purpose clause", fenced=False):
        text = json.dumps({
            "clauses": clauses,
            "rootClauseId": root,
            "structureDescription": description,
        }, ensure_ascii=False, indent=2)
        if fenced:
            text = f"```json\n{text}\n```"
        return text
    return _make


@pytest.fixture
def valid_response(make_response, main_clause, purpose_clause):
    """Raw response that fully and uniquely covers the passage."""
    return make_response([main_clause, purpose_clause])
