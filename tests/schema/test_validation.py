from __future__ import annotations

import pytest

from pagegraph.document.wikitext import parse_wikitext
from pagegraph.schema.model import (
    BlockType,
    ChildLink,
    ExtractionSchema,
    SchemaError,
    Template,
    Variable,
    validate_schema,
)


def _template(name: str, syntax: str, *variables: Variable, post_processor: str | None = None) -> Template:
    return Template(
        name=name,
        pattern=parse_wikitext(syntax, pattern=True),
        variables=variables,
        post_processor=post_processor,
    )


def test_valid_chain_passes() -> None:
    child = BlockType("entry", indicator=_template("start", "== $x =="))
    schema = ExtractionSchema(page=BlockType("page", child=ChildLink(child, "http://example.org/p")))

    validate_schema(schema)

    assert list(schema.block_chain()) == [schema.page, child]


def test_non_root_block_needs_indicator() -> None:
    child = BlockType("entry")
    schema = ExtractionSchema(page=BlockType("page", child=ChildLink(child, "http://example.org/p")))

    with pytest.raises(SchemaError, match="'entry' has no indicator"):
        validate_schema(schema)


def test_cycle_is_detected() -> None:
    looping = BlockType("loop", indicator=_template("start", "== $x =="))
    object.__setattr__(looping, "child", ChildLink(looping, "http://example.org/p"))
    schema = ExtractionSchema(page=BlockType("page", child=ChildLink(looping, "http://example.org/p")))

    with pytest.raises(SchemaError, match="cycle"):
        validate_schema(schema)


def test_variable_needs_property() -> None:
    page = BlockType("page", templates=(_template("t", "$x", Variable("x", "")),))

    with pytest.raises(SchemaError, match="without name or property"):
        validate_schema(ExtractionSchema(page=page))


def test_unknown_hook_rejected_only_when_registry_given() -> None:
    page = BlockType("page", templates=(_template("t", "$x", post_processor="custom"),))
    schema = ExtractionSchema(page=page)

    validate_schema(schema)
    with pytest.raises(SchemaError, match="custom"):
        validate_schema(schema, hooks={"other"})


def test_block_types_compare_by_identity() -> None:
    first = BlockType("entry")
    second = BlockType("entry")

    assert first != second
    assert len({first, second}) == 2
