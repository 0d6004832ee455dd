import pytest

from bristol_circuits.circuit import AndGate, Header, InvGate, XorGate
from bristol_circuits.exceptions import (
    ArityMismatch,
    BristolFormatError,
    MalformedNumber,
    StructuralError,
    UnknownGateType,
    UnsupportedGateType,
)
from bristol_circuits.parser import SourceLine, parse, parse_gate, parse_header, split_lines

AND_TREE = """4 8
4 1 1 1 1
1 1

2 1 0 1 4 AND
2 1 2 3 5 AND
2 1 4 5 6 AND
1 1 6 7 INV
"""


def _line(text: str, number: int = 1) -> SourceLine:
    return SourceLine(number, text)


def _header(*lines: str):
    return parse_header([_line(text, i) for i, text in enumerate(lines, 1)])


# -----------------------------------------------------------------------------
# Tokenizer
# -----------------------------------------------------------------------------

def test_split_lines_drops_blank_lines_and_keeps_numbers():
    lines = split_lines("a\n\nb\n\n\nc\n")
    assert [line.text for line in lines] == ["a", "b", "c"]
    assert [line.number for line in lines] == [1, 3, 6]


def test_split_lines_strips_carriage_returns_only():
    lines = split_lines("4 8\r\n  1 1 \r\n1 1\r\n")
    assert [line.text for line in lines] == ["4 8", "  1 1 ", "1 1"]


def test_split_lines_requires_three_lines():
    with pytest.raises(StructuralError) as excinfo:
        split_lines("4 8\n\n1 1\n")
    assert excinfo.value.found == "2"


def test_split_lines_empty_input():
    with pytest.raises(StructuralError):
        split_lines("")


# -----------------------------------------------------------------------------
# Header
# -----------------------------------------------------------------------------

def test_parse_header():
    header = _header("4 8", "4 1 1 1 1", "1 1")
    assert header == Header(
        num_gates=4,
        num_wires=8,
        num_input_wires=(1, 1, 1, 1),
        num_output_wires=(1,),
    )
    assert header.num_inputs == 4
    assert header.num_outputs == 1


def test_parse_header_port_order_is_preserved():
    header = _header("10 300", "3 64 32 8", "2 16 1")
    assert header.num_input_wires == (64, 32, 8)
    assert header.num_output_wires == (16, 1)
    assert header.total_input_wires == 104
    assert header.total_output_wires == 17


def test_parse_header_zero_ports():
    header = _header("0 0", "0", "0")
    assert header.num_input_wires == ()
    assert header.num_output_wires == ()


def test_port_count_larger_than_list_fails():
    with pytest.raises(StructuralError) as excinfo:
        _header("4 8", "3 1 1", "1 1")
    assert excinfo.value.line_number == 2
    assert excinfo.value.field == "input ports"


def test_port_count_smaller_than_list_fails():
    with pytest.raises(StructuralError):
        _header("4 8", "1 1", "1 1 1")


def test_general_line_rejects_extra_tokens():
    with pytest.raises(StructuralError):
        _header("4 8 9", "1 1", "1 1")


def test_general_line_requires_two_tokens():
    with pytest.raises(StructuralError):
        _header("4", "1 1", "1 1")


def test_header_rejects_non_numeric_token():
    with pytest.raises(MalformedNumber) as excinfo:
        _header("4 eight", "1 1", "1 1")
    assert excinfo.value.field == "num_wires"


@pytest.mark.parametrize("token", ["-1", "+1", "1.0", "4294967296", "1_0", "0x10"])
def test_header_rejects_malformed_numbers(token):
    with pytest.raises(MalformedNumber):
        _header(f"4 {token}", "1 1", "1 1")


def test_header_accepts_max_u32():
    header = _header("4 4294967295", "1 1", "1 1")
    assert header.num_wires == 4294967295


def test_whitespace_only_header_line_fails():
    with pytest.raises(StructuralError):
        _header("4 8", "   ", "1 1")


# -----------------------------------------------------------------------------
# Gates
# -----------------------------------------------------------------------------

def test_parse_xor_gate():
    assert parse_gate(_line("2 1 42 43 44 XOR")) == XorGate(input_a=42, input_b=43, output=44)


def test_parse_and_gate():
    assert parse_gate(_line("2 1 0 1 4 AND")) == AndGate(input_a=0, input_b=1, output=4)


def test_parse_inv_gate():
    assert parse_gate(_line("1 1 16 17 INV")) == InvGate(input=16, output=17)


def test_not_is_an_alias_for_inv():
    assert parse_gate(_line("1 1 16 17 NOT")) == InvGate(input=16, output=17)


def test_gate_line_with_extra_whitespace():
    assert parse_gate(_line("  2   1  0\t1  4  AND ")) == AndGate(0, 1, 4)


def test_and_with_wrong_input_count_is_arity_mismatch():
    with pytest.raises(ArityMismatch) as excinfo:
        parse_gate(_line("1 1 0 4 AND", number=7))
    error = excinfo.value
    assert error.line_number == 7
    assert error.expected == "2"
    assert error.found == "1"
    assert "line 7" in str(error)


def test_xor_with_wrong_output_count_is_arity_mismatch():
    with pytest.raises(ArityMismatch):
        parse_gate(_line("2 2 0 1 4 5 XOR"))


@pytest.mark.parametrize(
    "text", ["02 1 0 1 4 AND", "2 01 0 1 4 XOR", "1 01 6 7 INV", "01 1 6 7 NOT"]
)
def test_zero_padded_counts_are_arity_mismatch(text):
    with pytest.raises(ArityMismatch) as excinfo:
        parse_gate(_line(text))
    assert excinfo.value.found.startswith("0")


def test_error_message_format():
    error = ArityMismatch(
        "wrong number of input wires",
        line_number=7,
        field="AND input count",
        expected="2",
        found="1",
    )
    assert str(error) == "line 7: AND input count: wrong number of input wires: expected 2, found 1"

    bare = StructuralError("too few lines for a header", field="header")
    assert str(bare) == "header: too few lines for a header"


def test_inv_with_two_inputs_is_arity_mismatch():
    with pytest.raises(ArityMismatch):
        parse_gate(_line("2 1 0 1 4 INV"))


def test_gate_with_missing_wire_is_structural_error():
    with pytest.raises(StructuralError):
        parse_gate(_line("2 1 0 4 AND"))


def test_gate_with_extra_wire_is_structural_error():
    with pytest.raises(StructuralError):
        parse_gate(_line("1 1 6 7 8 INV"))


def test_gate_with_only_a_tag_is_structural_error():
    with pytest.raises(StructuralError):
        parse_gate(_line("AND"))


def test_gate_with_malformed_wire():
    with pytest.raises(MalformedNumber) as excinfo:
        parse_gate(_line("2 1 0 x 4 AND"))
    assert excinfo.value.field == "AND wire 1"


def test_unknown_gate_type():
    with pytest.raises(UnknownGateType) as excinfo:
        parse_gate(_line("2 1 0 1 4 FOO"))
    assert excinfo.value.tag == "FOO"
    assert not isinstance(excinfo.value, UnsupportedGateType)


@pytest.mark.parametrize("tag", ["EQ", "EQW", "MAND"])
def test_unsupported_gate_types(tag):
    with pytest.raises(UnsupportedGateType) as excinfo:
        parse_gate(_line(f"2 1 0 1 4 {tag}"))
    assert excinfo.value.tag == tag
    assert not isinstance(excinfo.value, UnknownGateType)


def test_gate_tags_are_case_sensitive():
    with pytest.raises(UnknownGateType):
        parse_gate(_line("2 1 0 1 4 and"))


# -----------------------------------------------------------------------------
# Circuit assembly
# -----------------------------------------------------------------------------

def test_parse_and_tree():
    circuit = parse(AND_TREE)

    assert circuit.header == Header(4, 8, (1, 1, 1, 1), (1,))
    assert circuit.gates == (
        AndGate(0, 1, 4),
        AndGate(2, 3, 5),
        AndGate(4, 5, 6),
        InvGate(6, 7),
    )


def test_blank_lines_do_not_change_the_result():
    without_blank = AND_TREE.replace("\n\n", "\n")
    repeated_blank = AND_TREE.replace("\n\n", "\n\n\n\n")
    interleaved = AND_TREE.replace("AND\n", "AND\n\n")

    expected = parse(AND_TREE)
    assert parse(without_blank) == expected
    assert parse(repeated_blank) == expected
    assert parse(interleaved) == expected


def test_parse_is_idempotent():
    assert parse(AND_TREE) == parse(AND_TREE)


def test_parse_header_only_circuit():
    circuit = parse("0 2\n1 1\n1 1\n")
    assert circuit.gates == ()
    assert circuit.header.num_wires == 2


def test_declared_gate_count_is_not_enforced():
    circuit = parse(AND_TREE.replace("4 8", "10 8", 1))
    assert circuit.header.num_gates == 10
    assert circuit.gate_count == 4


def test_error_reports_source_line_number():
    text = AND_TREE.replace("2 1 4 5 6 AND", "2 1 4 5 6 FOO")
    with pytest.raises(UnknownGateType) as excinfo:
        parse(text)
    assert excinfo.value.line_number == 7
    assert excinfo.value.line == "2 1 4 5 6 FOO"


def test_parse_fails_without_header():
    with pytest.raises(StructuralError):
        parse("4 8\n\n\n")


def test_all_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse("4 8\n1 1\n1 1\n2 1 0 1 2 MAND\n")
    assert issubclass(UnsupportedGateType, BristolFormatError)
