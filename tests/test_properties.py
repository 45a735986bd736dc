"""Property-based tests for canonical form and fingerprint determinism."""

from hypothesis import given, settings, strategies as st

from idempofy.api import strict
from idempofy.utils.canonical import canonicalize, is_canonical

json_data = st.recursive(
    st.one_of(
        st.none(),
        st.booleans(),
        st.integers(),
        st.floats(allow_nan=False, allow_infinity=False),
        st.text(),
    ),
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(st.text(max_size=20), children, max_size=5),
    ),
    max_leaves=10,
)


@given(json_data)
@settings(deadline=5000, max_examples=300)
def test_canonical_form_is_idempotent(data: object) -> None:
    """Canonical output is itself canonical."""
    assert is_canonical(canonicalize(data))


@given(json_data)
@settings(deadline=5000, max_examples=200)
def test_canonical_is_deterministic(data: object) -> None:
    """Repeated calls give identical output."""
    assert canonicalize(data) == canonicalize(data)


@given(st.dictionaries(st.text(max_size=10), json_data, max_size=8))
@settings(deadline=5000, max_examples=200)
def test_canonical_ignores_insertion_order(data: dict) -> None:
    """Reversing key insertion order changes nothing."""
    reordered = dict(reversed(list(data.items())))
    assert canonicalize(reordered) == canonicalize(data)


@given(st.dictionaries(st.text(max_size=10), json_data, max_size=8))
@settings(deadline=5000, max_examples=100)
def test_strict_fingerprint_ignores_insertion_order(data: dict) -> None:
    """Strict fingerprints are insertion-order independent."""
    reordered = dict(reversed(list(data.items())))
    assert strict(reordered) == strict(data)


@given(st.one_of(st.just(float("nan")), st.just(float("inf")), st.just(float("-inf"))))
def test_non_finite_collapse(value: float) -> None:
    """Every non-finite float canonicalizes to null."""
    assert canonicalize(value) == "null"
