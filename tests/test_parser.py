"""Tests for the parser module: symbol model, forest helpers, tree-sitter outliner."""

import pytest

from driver_outline_mcp.errors import SymbolProviderError
from driver_outline_mcp.parser import (
    Symbol,
    SymbolKind,
    SourcePosition,
    SourceRange,
    TreeSitterSymbolProvider,
    count_symbols,
    flatten_tree,
    outline_source,
    sort_symbols,
)


def _sym(name, line, column=0, children=(), kind=SymbolKind.FUNCTION):
    return Symbol(
        name=name,
        kind=kind,
        range=SourceRange.from_points((line, column), (line + 1, 0)),
        children=tuple(children),
    )


def _find(symbols, name):
    return next((s for s in symbols if s.name == name), None)


def test_range_rejects_end_before_start():
    """Test that a range cannot end before it starts."""
    with pytest.raises(ValueError):
        SourceRange(SourcePosition(3, 0), SourcePosition(2, 5))


def test_position_rejects_negative():
    with pytest.raises(ValueError):
        SourcePosition(-1, 0)


def test_symbol_kind_labels():
    """Test human-readable kind labels."""
    assert SymbolKind.FUNCTION.label == "function"
    assert SymbolKind.ENUM_MEMBER.label == "enum member"
    assert SymbolKind.TYPE_PARAMETER.label == "type parameter"
    assert int(SymbolKind.STRUCT) == 22


def test_sort_symbols_every_level():
    """Test sorting by line then column, children sorted independently."""
    forest = [
        _sym("late", 10),
        _sym("parent", 2, children=[_sym("c2", 5, 4), _sym("c1", 5, 1), _sym("c0", 3)]),
        _sym("same_line_right", 1, 8),
        _sym("same_line_left", 1, 2),
    ]

    ordered = sort_symbols(forest)

    assert [s.name for s in ordered] == ["same_line_left", "same_line_right", "parent", "late"]
    parent = _find(ordered, "parent")
    assert [c.name for c in parent.children] == ["c0", "c1", "c2"]


def test_sort_symbols_is_stable():
    """Test that ties keep their original relative order."""
    forest = [_sym("b", 4, 2), _sym("a", 4, 2), _sym("c", 4, 2)]
    assert [s.name for s in sort_symbols(forest)] == ["b", "a", "c"]


def test_sort_symbols_does_not_mutate_input():
    parent = _sym("parent", 0, children=[_sym("y", 5), _sym("x", 1)])
    sort_symbols([parent])
    assert [c.name for c in parent.children] == ["y", "x"]


def test_count_symbols_includes_descendants():
    forest = [
        _sym("a", 0, children=[_sym("b", 1, children=[_sym("c", 2)]), _sym("d", 3)]),
        _sym("e", 4),
    ]
    assert count_symbols(forest) == 5
    assert count_symbols([]) == 0


def test_flatten_tree_depths():
    forest = [_sym("a", 0, children=[_sym("b", 1, children=[_sym("c", 2)])]), _sym("d", 3)]
    flat = [(s.name, depth) for s, depth in flatten_tree(forest)]
    assert flat == [("a", 0), ("b", 1), ("c", 2), ("d", 0)]


C_SOURCE = '''#include <stdio.h>

#define MAX_DEVICES 8

struct device {
    int id;
    char name[16];
};

enum state { STATE_IDLE, STATE_RUNNING = 2 };

static int device_count = 0;

int probe(struct device *dev);

int probe(struct device *dev)
{
    int local = 0;
    return dev->id + local;
}
'''


def test_outline_c_source():
    """Test C outlining: macros, structs, enums, globals, prototypes, functions."""
    symbols = outline_source(C_SOURCE, "c")

    names = [s.name for s in symbols]
    assert names == ["MAX_DEVICES", "device", "state", "device_count", "probe", "probe"]

    macro = _find(symbols, "MAX_DEVICES")
    assert macro.kind == SymbolKind.CONSTANT
    assert macro.detail == "8"
    assert macro.range.start == SourcePosition(2, 0)

    device = _find(symbols, "device")
    assert device.kind == SymbolKind.STRUCT
    assert [(c.name, c.kind) for c in device.children] == [
        ("id", SymbolKind.FIELD),
        ("name", SymbolKind.FIELD),
    ]

    state = _find(symbols, "state")
    assert state.kind == SymbolKind.ENUM
    assert [c.name for c in state.children] == ["STATE_IDLE", "STATE_RUNNING"]
    assert all(c.kind == SymbolKind.ENUM_MEMBER for c in state.children)
    assert state.children[1].detail == "2"

    assert _find(symbols, "device_count").kind == SymbolKind.VARIABLE

    prototype, definition = [s for s in symbols if s.name == "probe"]
    assert prototype.kind == SymbolKind.FUNCTION
    assert definition.kind == SymbolKind.FUNCTION
    assert definition.detail == "int probe(struct device *dev)"
    assert definition.range.start.line == 15
    assert definition.children == ()


def test_outline_skips_function_locals():
    """Test that function bodies are not descended into."""
    symbols = outline_source(C_SOURCE, "c")
    all_names = [s.name for s, _ in flatten_tree(symbols)]
    assert "local" not in all_names


CPP_SOURCE = '''namespace drv {

class Device {
public:
    Device();
    ~Device();
    int read(int reg) const;
    bool operator==(const Device &other) const;
private:
    int id_;
};

int Device::read(int reg) const {
    return reg + id_;
}

template <typename T>
T clamp(T value, T lo, T hi) {
    return value < lo ? lo : (value > hi ? hi : value);
}

}  // namespace drv
'''


def test_outline_cpp_source():
    """Test C++ outlining: namespaces, classes, members, templates."""
    symbols = outline_source(CPP_SOURCE, "cpp")

    assert len(symbols) == 1
    namespace = symbols[0]
    assert namespace.name == "drv"
    assert namespace.kind == SymbolKind.NAMESPACE
    assert namespace.range.start == SourcePosition(0, 0)

    assert [s.name for s in namespace.children] == ["Device", "Device::read", "clamp"]

    device = _find(namespace.children, "Device")
    assert device.kind == SymbolKind.CLASS
    members = {m.name: m.kind for m in device.children}
    assert members["Device"] == SymbolKind.CONSTRUCTOR
    assert members["~Device"] == SymbolKind.METHOD
    assert members["read"] == SymbolKind.METHOD
    assert members["operator=="] == SymbolKind.OPERATOR
    assert members["id_"] == SymbolKind.FIELD

    assert _find(namespace.children, "Device::read").kind == SymbolKind.METHOD
    assert _find(namespace.children, "clamp").kind == SymbolKind.FUNCTION


def test_outline_typedef_struct():
    """Test that typedef'd anonymous structs yield the struct and the alias."""
    symbols = outline_source("typedef struct {\n    int x;\n} point_t;\n", "c")

    assert [s.name for s in symbols] == ["(anonymous struct)", "point_t"]
    assert symbols[0].kind == SymbolKind.STRUCT
    assert [c.name for c in symbols[0].children] == ["x"]
    assert symbols[1].detail == "typedef struct"


def test_unknown_language_returns_empty():
    """Test that unknown languages return empty list."""
    assert outline_source("int x;", "fortran") == []


@pytest.mark.asyncio
async def test_provider_outlines_file(tmp_path):
    """Test the async provider reads and outlines a file."""
    source = tmp_path / "main.c"
    source.write_text("int main(void)\n{\n    return 0;\n}\n", encoding="utf-8")

    symbols = await TreeSitterSymbolProvider()(str(source))

    assert len(symbols) == 1
    assert symbols[0].name == "main"
    assert symbols[0].kind == SymbolKind.FUNCTION


@pytest.mark.asyncio
async def test_provider_missing_file_raises(tmp_path):
    """Test that unreadable files raise SymbolProviderError."""
    with pytest.raises(SymbolProviderError):
        await TreeSitterSymbolProvider()(str(tmp_path / "missing.c"))
