"""Tests for case-arm validation and exhaustiveness."""

import pytest

from lambdatype.core.ast import Arm, Binder, Constructor, NatLit, ProductPattern, Wildcard
from lambdatype.core.errors import InvalidPattern, NotExhaustive, UnreachablePattern
from lambdatype.core.patterns import PatternChecker
from lambdatype.core.types import Bool, Nat, Product, Unit, variant
from lambdatype.utils.location import Span

ABC = variant(A=Nat(), B=Bool(), C=Unit())


def arm(pattern, line=1):
    return Arm(pattern, NatLit(0), span=Span.at(line, 1))


class TestCoverage:
    """Tests for exhaustiveness."""

    def test_all_labels_in_any_order(self):
        arms = [arm(Constructor("C")), arm(Constructor("A")), arm(Constructor("B"))]
        assert PatternChecker(ABC).check(arms) == [[], [], []]

    def test_missing_label(self):
        arms = [arm(Constructor("A")), arm(Constructor("B"))]
        with pytest.raises(NotExhaustive) as exc_info:
            PatternChecker(ABC).check(arms)
        assert exc_info.value.missing == ["C"]

    def test_no_arms(self):
        with pytest.raises(NotExhaustive) as exc_info:
            PatternChecker(ABC).check([])
        assert exc_info.value.missing == ["A", "B", "C"]

    def test_trailing_wildcard_covers_rest(self):
        arms = [arm(Constructor("B")), arm(Wildcard())]
        assert PatternChecker(ABC).check(arms) == [[], []]

    def test_trailing_binder_binds_scrutinee(self):
        arms = [arm(Constructor("A")), arm(Binder())]
        assert PatternChecker(ABC).check(arms) == [[], [ABC]]


class TestReachability:
    """Tests for duplicated and shadowed arms."""

    def test_duplicate_label_flagged_at_second(self):
        arms = [
            arm(Constructor("A"), line=1),
            arm(Constructor("B"), line=2),
            arm(Constructor("A"), line=3),
            arm(Constructor("C"), line=4),
        ]
        with pytest.raises(UnreachablePattern) as exc_info:
            PatternChecker(ABC).check(arms)
        assert exc_info.value.label == "A"
        assert exc_info.value.span == Span.at(3, 1)

    def test_arm_after_catch_all(self):
        arms = [arm(Wildcard()), arm(Constructor("A"), line=2)]
        with pytest.raises(UnreachablePattern) as exc_info:
            PatternChecker(ABC).check(arms)
        assert exc_info.value.span == Span.at(2, 1)

    def test_second_catch_all(self):
        arms = [arm(Constructor("A")), arm(Wildcard()), arm(Binder(), line=3)]
        with pytest.raises(UnreachablePattern) as exc_info:
            PatternChecker(ABC).check(arms)
        assert exc_info.value.label is None

    def test_catch_all_after_full_coverage(self):
        arms = [arm(Constructor("A")), arm(Constructor("B")), arm(Constructor("C")), arm(Wildcard())]
        with pytest.raises(UnreachablePattern):
            PatternChecker(ABC).check(arms)


class TestInvalidPatterns:
    """Tests for labels and payload patterns that cannot match."""

    def test_undeclared_label(self):
        with pytest.raises(InvalidPattern, match="label D"):
            PatternChecker(ABC).check([arm(Constructor("D"))])

    def test_undeclared_label_reported_before_duplicate(self):
        arms = [arm(Constructor("D"), line=1), arm(Constructor("D"), line=2)]
        with pytest.raises(InvalidPattern) as exc_info:
            PatternChecker(ABC).check(arms)
        assert exc_info.value.span == Span.at(1, 1)

    def test_refutable_payload(self):
        with pytest.raises(InvalidPattern, match="refutable"):
            PatternChecker(ABC).check([arm(Constructor("A", Constructor("A")))])

    def test_top_level_product_pattern(self):
        with pytest.raises(InvalidPattern):
            PatternChecker(ABC).check([arm(ProductPattern((Binder(),)))])


class TestPayloadBinders:
    """Tests for the types bound by payload patterns."""

    PAIR = variant(pair=Product((Nat(), Bool())), empty=Unit())

    def test_product_destructuring(self):
        arms = [
            arm(Constructor("pair", ProductPattern((Binder(), Wildcard())))),
            arm(Constructor("empty", Binder())),
        ]
        assert PatternChecker(self.PAIR).check(arms) == [[Nat()], [Unit()]]

    def test_product_binds_left_to_right(self):
        arms = [
            arm(Constructor("pair", ProductPattern((Binder(), Binder())))),
            arm(Constructor("empty")),
        ]
        assert PatternChecker(self.PAIR).check(arms)[0] == [Nat(), Bool()]

    def test_product_arity_mismatch(self):
        arms = [arm(Constructor("pair", ProductPattern((Binder(),)))), arm(Constructor("empty"))]
        with pytest.raises(InvalidPattern):
            PatternChecker(self.PAIR).check(arms)

    def test_product_pattern_on_non_product(self):
        arms = [arm(Constructor("empty", ProductPattern((Binder(),))))]
        with pytest.raises(InvalidPattern):
            PatternChecker(self.PAIR).check(arms)
