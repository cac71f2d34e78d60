"""
Unit tests for CoverageValidator.
"""

import pytest

from clausetree.domain.clause import Clause, ClauseKind
from clausetree.domain.diagnostics import DiagnosticCode, DiagnosticLog
from clausetree.domain.passage import Passage
from clausetree.errors import IncompleteCoverageError, IndexOutOfRangeError
from clausetree.services.coverage_validator import CoverageValidator


def _clause(clause_id, indices):
    return Clause(id=clause_id, kind=ClauseKind.MAIN, token_indices=tuple(indices))


@pytest.fixture
def validator():
    return CoverageValidator()


@pytest.fixture
def diagnostics():
    return DiagnosticLog()


class TestCoverageValidator:
    """Tests for token ownership."""

    def test_exact_partition(self, validator, diagnostics, passage):
        result = validator.validate([_clause("c1", [0, 1, 2]), _clause("c2", [3, 4])], passage, diagnostics)

        assert result.ownership == {0: "c1", 1: "c1", 2: "c1", 3: "c2", 4: "c2"}
        assert result.duplicate_claims == 0
        assert result.indices_owned_by("c2") == [3, 4]
        assert len(diagnostics) == 0

    def test_first_occurrence_wins(self, validator, diagnostics, passage):
        result = validator.validate([_clause("c1", [0, 1, 2]), _clause("c2", [1, 3, 4])], passage, diagnostics)

        assert result.ownership[1] == "c1"
        assert result.duplicate_claims == 1
        found = diagnostics.of_code(DiagnosticCode.DUPLICATE_CLAIM)
        assert len(found) == 1
        assert found[0].token_index == 1
        assert found[0].details == {"owner": "c1", "claimant": "c2", "text": "οὖν"}

    def test_repeat_within_one_clause_is_a_duplicate(self, validator, diagnostics, passage):
        result = validator.validate([_clause("c1", [0, 1, 1, 2, 3, 4])], passage, diagnostics)
        assert result.duplicate_claims == 1
        assert "more than once" in diagnostics.items[0].message

    def test_out_of_range_index(self, validator, diagnostics, passage):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            validator.validate([_clause("clause_2", [3, 7])], passage, diagnostics)

        error = exc_info.value
        assert error.clause_id == "clause_2"
        assert error.index == 7
        assert error.valid_range == "0-4"
        assert "Valid range is 0-4" in error.user_message

    def test_negative_index_is_out_of_range(self, validator, diagnostics, passage):
        with pytest.raises(IndexOutOfRangeError):
            validator.validate([_clause("c1", [-1, 0, 1, 2, 3, 4])], passage, diagnostics)

    def test_out_of_range_reported_before_missing_words(self, validator, diagnostics, passage):
        with pytest.raises(IndexOutOfRangeError):
            validator.validate([_clause("c1", [0, 9])], passage, diagnostics)

    def test_missing_word_listed(self, validator, diagnostics, passage):
        with pytest.raises(IncompleteCoverageError) as exc_info:
            validator.validate([_clause("c1", [0, 1]), _clause("c2", [3, 4])], passage, diagnostics)

        error = exc_info.value
        assert error.missing_indices == [2]
        assert error.missing == [(2, "ὑμᾶς")]
        assert "ὑμᾶς" in error.user_message
        assert "2" in error.user_message

    def test_empty_passage_is_trivially_covered(self, validator, diagnostics):
        empty = Passage.from_words("Empty", [])
        result = validator.validate([_clause("c1", [])], empty, diagnostics)
        assert result.ownership == {}


class TestPruneToOwnership:
    """Tests for removing duplicate claims from later clauses."""

    def test_prunes_later_claim_and_keeps_declaration(self, validator, diagnostics, passage):
        clauses = [_clause("c1", [0, 1, 2]), _clause("c2", [1, 3, 4])]
        result = validator.validate(clauses, passage, diagnostics)

        pruned = validator.prune_to_ownership(clauses, result)

        assert pruned[0] is clauses[0]
        assert pruned[1].token_indices == (3, 4)
        assert pruned[1].declared_token_indices == (1, 3, 4)
        assert pruned[1].was_pruned
        assert not pruned[0].was_pruned

    def test_pruned_clauses_partition_the_passage(self, validator, diagnostics, passage):
        clauses = [_clause("c1", [0, 1, 1, 2]), _clause("c2", [2, 3, 4])]
        result = validator.validate(clauses, passage, diagnostics)

        pruned = validator.prune_to_ownership(clauses, result)

        claimed = [i for c in pruned for i in c.token_indices]
        assert sorted(claimed) == [0, 1, 2, 3, 4]
        assert len(claimed) == len(set(claimed))


class TestCheckRanges:
    """Tests for the range scan run before tree building."""

    def test_first_bad_index_in_response_order(self):
        claims = [("clause_1", [0, 1]), ("clause_2", [9, -1]), ("clause_3", [12])]
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            CoverageValidator.check_ranges(claims, 5)
        assert (exc_info.value.clause_id, exc_info.value.index) == ("clause_2", 9)

    def test_in_range_claims_pass(self):
        CoverageValidator.check_ranges([("clause_1", [0, 4])], 5)

    def test_empty_passage_has_no_valid_range(self):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            CoverageValidator.check_ranges([("clause_1", [0])], 0)

        error = exc_info.value
        assert error.valid_range is None
        assert error.details["validRange"] is None
        assert "0--1" not in error.user_message
        assert error.user_message == "Clause clause_1 contains invalid word index 0. The passage has no words"
