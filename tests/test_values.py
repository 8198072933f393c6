"""Tests for reqparams.values — Scalar / Multiple tagged union."""

import pytest

from reqparams.values import Multiple, Scalar, as_list, first, to_python


class TestScalar:
    def test_rejects_non_str(self) -> None:
        with pytest.raises(TypeError):
            Scalar(["a"])  # type: ignore[arg-type]


class TestMultiple:
    def test_list_coerced_to_tuple(self) -> None:
        assert Multiple(["a", "b"]).values == ("a", "b")  # type: ignore[arg-type]

    def test_rejects_plain_str(self) -> None:
        with pytest.raises(TypeError):
            Multiple("ab")  # type: ignore[arg-type]

    def test_rejects_mixed_shapes(self) -> None:
        with pytest.raises(TypeError):
            Multiple(("a", ["b"]))  # type: ignore[arg-type]

    def test_append_returns_new(self) -> None:
        original = Multiple(("a",))
        appended = original.append("b")
        assert appended == Multiple(("a", "b"))
        assert original == Multiple(("a",))


class TestAccessors:
    def test_as_list(self) -> None:
        assert as_list(None) == []
        assert as_list(Scalar("a")) == ["a"]
        assert as_list(Multiple(("a", "b"))) == ["a", "b"]

    def test_first(self) -> None:
        assert first(None) is None
        assert first(Scalar("a")) == "a"
        assert first(Multiple(("a", "b"))) == "a"
        assert first(Multiple(())) is None

    def test_to_python(self) -> None:
        assert to_python(None) is None
        assert to_python(Scalar("a")) == "a"
        assert to_python(Multiple(("a",))) == ["a"]

    def test_not_a_value(self) -> None:
        with pytest.raises(TypeError):
            first("a")  # type: ignore[arg-type]
