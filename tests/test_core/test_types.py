"""Tests for type representations."""

import pytest

from lambdatype.core.types import (
    Abstraction,
    Alias,
    Application,
    Arrow,
    Bool,
    Existential,
    Field,
    KindArrow,
    Nat,
    Product,
    Recursive,
    Star,
    Unit,
    Universal,
    Variable,
    Variant,
    variant,
)


class TestStr:
    """Tests for the debug representation."""

    def test_base_types(self):
        assert str(Unit()) == "Unit"
        assert str(Nat()) == "Nat"
        assert str(Bool()) == "Bool"

    def test_alias_and_variable(self):
        assert str(Alias("NatList")) == "NatList"
        assert str(Variable(2)) == "TyVar(2)"

    def test_arrow(self):
        t = Arrow(Arrow(Nat(), Bool()), Nat())
        assert str(t) == "((Nat -> Bool) -> Nat)"

    def test_variant(self):
        assert str(variant(none=Unit(), some=Nat())) == "<none: Unit | some: Nat>"

    def test_product(self):
        assert str(Product((Bool(), Nat()))) == "(Bool, Nat)"

    def test_binders(self):
        body = Arrow(Variable(0), Variable(0))
        assert str(Universal(body)) == "forall X.(TyVar(0) -> TyVar(0))"
        assert str(Existential(Variable(0))) == "exists X.TyVar(0)"
        assert str(Recursive(Variable(0))) == "rec TyVar(0)"
        assert str(Abstraction(Star(), Variable(0))) == "lambda X::*.TyVar(0)"

    def test_application(self):
        assert str(Application(Alias("List"), Nat())) == "(List Nat)"

    def test_kinds(self):
        assert str(KindArrow(Star(), Star())) == "* => *"
        assert str(KindArrow(KindArrow(Star(), Star()), Star())) == "(* => *) => *"


class TestVariant:
    """Tests for variant construction and lookup."""

    def test_duplicate_label_rejected(self):
        with pytest.raises(ValueError, match="Duplicate variant label"):
            Variant((Field("a", Nat()), Field("a", Bool())))

    def test_list_is_stored_as_tuple(self):
        v = Variant([Field("a", Nat())])
        assert isinstance(v.fields, tuple)
        assert hash(v) == hash(Variant((Field("a", Nat()),)))

    def test_labels_keep_declaration_order(self):
        v = variant(c=Unit(), a=Nat(), b=Bool())
        assert v.labels == ["c", "a", "b"]

    def test_field_lookup(self):
        v = variant(none=Unit(), some=Nat())
        assert v.field("some") == Nat()
        assert v.field("other") is None


class TestTypeEquality:
    """Equality is structural and index-positional."""

    def test_base_equality(self):
        assert Nat() == Nat()
        assert Nat() != Bool()

    def test_universal_equality_by_index(self):
        assert Universal(Arrow(Variable(0), Variable(0))) == Universal(Arrow(Variable(0), Variable(0)))
        assert Universal(Variable(0)) != Universal(Variable(1))

    def test_alias_not_equal_to_target(self):
        """Unresolved aliases only compare by name."""
        assert Alias("N") != Nat()
        assert Alias("N") == Alias("N")

    def test_variant_field_order_matters(self):
        assert variant(a=Nat(), b=Bool()) != variant(b=Bool(), a=Nat())

    def test_product_arity(self):
        assert Product((Nat(),)) != Product((Nat(), Nat()))
