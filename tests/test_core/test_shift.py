"""Tests for shifting and substitution of type variables."""

import pytest

from lambdatype.core.errors import RecursionLimitExceeded
from lambdatype.core.shift import free_in, normalize, shift, subst_top
from lambdatype.core.types import (
    Abstraction,
    Application,
    Arrow,
    Bool,
    Existential,
    Nat,
    Product,
    Recursive,
    Star,
    Universal,
    Variable,
    variant,
)

SAMPLE_TYPES = [
    Nat(),
    Variable(0),
    Arrow(Variable(0), Universal(Variable(1))),
    Universal(Arrow(Variable(0), Variable(2))),
    Product((Variable(1), Existential(Variable(0)), Bool())),
    Recursive(variant(nil=Nat(), cons=Product((Variable(1), Variable(0))))),
    Application(Abstraction(Star(), Variable(1)), Variable(0)),
]


class TestShift:
    """Tests for shifting free indices."""

    def test_free_variable_bumped(self):
        assert shift(1, Variable(0)) == Variable(1)
        assert shift(3, Variable(2)) == Variable(5)

    def test_bound_variable_untouched(self):
        """Index 0 under a binder is bound; index 1 is free."""
        t = Universal(Arrow(Variable(0), Variable(1)))
        assert shift(1, t) == Universal(Arrow(Variable(0), Variable(2)))

    def test_cutoff_grows_per_binder(self):
        t = Universal(Recursive(Product((Variable(0), Variable(1), Variable(2)))))
        assert shift(2, t) == Universal(Recursive(Product((Variable(0), Variable(1), Variable(4)))))

    def test_negative_shift(self):
        assert shift(-1, Arrow(Variable(3), Universal(Variable(2)))) == Arrow(
            Variable(2), Universal(Variable(1))
        )

    def test_negative_below_zero_rejected(self):
        with pytest.raises(ValueError):
            shift(-1, Variable(0))

    @pytest.mark.parametrize("ty", SAMPLE_TYPES)
    def test_shift_zero_is_identity(self, ty):
        assert shift(0, ty) == ty

    @pytest.mark.parametrize("ty", SAMPLE_TYPES)
    @pytest.mark.parametrize("d1,d2", [(1, 2), (0, 3), (4, 0), (-1, 2), (-2, 2)])
    def test_shift_composition(self, ty, d1, d2):
        assert shift(d1, shift(d2, ty)) == shift(d1 + d2, ty)

    def test_closed_type_shares_structure(self):
        t = Arrow(Nat(), Product((Bool(), Nat())))
        assert shift(5, t) is t


class TestSubstTop:
    """Tests for the three-step instantiation."""

    def test_replaces_index_zero(self):
        assert subst_top(Nat(), Arrow(Variable(0), Variable(0))) == Arrow(Nat(), Nat())

    def test_closes_hole_left_by_binder(self):
        """Other free indices drop by one."""
        assert subst_top(Nat(), Arrow(Variable(0), Variable(1))) == Arrow(Nat(), Variable(0))

    def test_replacement_not_captured(self):
        """A free variable in the replacement must not be bound by the body's binders."""
        # body: forall Y. X -> Y  (X is index 1 under Y)
        body = Universal(Arrow(Variable(1), Variable(0)))
        # replace X by the outer variable 0
        result = subst_top(Variable(0), body)
        # forall Y. Z -> Y where Z is the outer variable, index 1 under Y
        assert result == Universal(Arrow(Variable(1), Variable(0)))

    def test_replacement_with_its_own_binder(self):
        body = Universal(Variable(1))
        replacement = Universal(Variable(1))
        assert subst_top(replacement, body) == Universal(Universal(Variable(2)))

    def test_recursive_unrolling(self, nat_list):
        unrolled = subst_top(nat_list, nat_list.body)
        assert unrolled == variant(nil=nat_list.body.field("nil"), cons=Product((Nat(), nat_list)))


class TestFreeIn:
    def test_free_at_top(self):
        assert free_in(1, Arrow(Variable(1), Nat()))
        assert not free_in(0, Arrow(Variable(1), Nat()))

    def test_respects_binders(self):
        assert free_in(0, Universal(Variable(1)))
        assert not free_in(0, Universal(Variable(0)))
        assert not free_in(0, Existential(Recursive(Variable(1))))


class TestNormalize:
    """Tests for type-operator beta reduction."""

    def test_simple_redex(self):
        t = Application(Abstraction(Star(), Arrow(Variable(0), Variable(0))), Nat())
        assert normalize(t) == Arrow(Nat(), Nat())

    def test_curried_operator(self):
        const = Abstraction(Star(), Abstraction(Star(), Variable(1)))
        t = Application(Application(const, Nat()), Bool())
        assert normalize(t) == Nat()

    def test_redex_under_binder(self):
        t = Universal(Application(Abstraction(Star(), Product((Variable(0), Variable(1)))), Bool()))
        assert normalize(t) == Universal(Product((Bool(), Variable(0))))

    def test_stuck_application_kept(self):
        t = Application(Variable(0), Nat())
        assert normalize(t) is t

    def test_divergent_type_hits_limit(self):
        omega = Abstraction(Star(), Application(Variable(0), Variable(0)))
        with pytest.raises(RecursionLimitExceeded):
            normalize(Application(omega, omega), max_depth=50)
