"""Tests for docport.signatures."""

from __future__ import annotations

from docport.signatures import (
    UNSUPPORTED,
    normalize,
    normalize_signature,
    parameters_from_signature,
)


def test_normalize_strips_nullability_and_namespaces() -> None:
    assert normalize(["string?", "System.Int32", "Microsoft.Maui.Controls.View"]) == "(string, Int32, View)"


def test_normalize_empty_parameter_list() -> None:
    assert normalize([]) == "()"


def test_normalize_drops_parameter_modifiers() -> None:
    assert normalize(["ref int", "params object[]"]) == "(int, object[])"


def test_generic_parameter_is_unsupported() -> None:
    assert normalize(["IList<View>"]) is UNSUPPORTED
    assert normalize(["int", "Func<T, bool>"]) is UNSUPPORTED


def test_parameters_from_member_signature_drops_names_and_defaults() -> None:
    signature = "public void Add (Microsoft.Maui.Controls.View view, int column = 0, int row = 0);"
    assert parameters_from_signature(signature) == ["Microsoft.Maui.Controls.View", "int", "int"]


def test_parameters_from_signature_without_parameter_list() -> None:
    assert parameters_from_signature("public string Text { get; set; }") == []
    assert parameters_from_signature("public void Clear ();") == []


def test_parameters_from_bare_type_list() -> None:
    assert parameters_from_signature("(int, string)") == ["int", "string"]


def test_stored_and_declared_signatures_compare_equal() -> None:
    stored = normalize_signature("public void SetValue (Xamarin.Forms.BindableProperty property, object value);")
    declared = normalize(["BindableProperty", "object?"])
    assert stored == declared == "(BindableProperty, object)"


def test_stored_generic_signature_is_unsupported() -> None:
    stored = normalize_signature(
        "public void SetBinding (System.Collections.Generic.IDictionary<string, object> values);"
    )
    assert stored is UNSUPPORTED


def test_unsupported_sentinel_never_equals_a_signature() -> None:
    assert UNSUPPORTED != "()"
    assert not UNSUPPORTED


def test_array_ranks_are_part_of_the_type() -> None:
    assert normalize(["int[]"]) == "(int[])"
    assert normalize(["System.Double[,]"]) == "(Double[,])"
    assert normalize(["int"]) != normalize(["int[]"])


def test_leading_attributes_are_dropped_but_array_brackets_kept() -> None:
    signature = "public void Fill ([System.Runtime.CompilerServices.Nullable(1)] int[] values, T[,] grid);"

    assert parameters_from_signature(signature) == ["int[]", "T[,]"]
    assert normalize(["[NotNull] int[]"]) == "(int[])"
