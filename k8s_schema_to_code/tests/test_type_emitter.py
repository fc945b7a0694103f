import pytest

from k8s_schema_to_code.pipeline.backends import get_backend
from k8s_schema_to_code.pipeline.code_writer import CodeWriter
from k8s_schema_to_code.pipeline.errors import UnsupportedSchemaTypeError, UnsupportedUnionVariantError
from k8s_schema_to_code.pipeline.ir_nodes import AliasDef, Description, StructDef, TypeKind, TypeRef, UnionDef
from k8s_schema_to_code.pipeline.resolver import ReferenceResolver
from k8s_schema_to_code.pipeline.scheduler import EmissionScheduler
from k8s_schema_to_code.pipeline.type_emitter import TypeEmitter, parse_description
from k8s_schema_to_code.pipeline.union_modeler import UnionModeler

DOCUMENT = {
    "definitions": {
        "io.k8s.Foo": {
            "description": "Foo is referenced.",
            "properties": {"bar": {"$ref": "#/definitions/io.k8s.Bar"}},
        },
        "io.k8s.Bar": {"type": "string"},
        "io.k8s.Node": {
            "properties": {
                "children": {"type": "array", "items": {"$ref": "#/definitions/io.k8s.Node"}},
            },
        },
    }
}


def make_emitter(language="typescript"):
    code = CodeWriter()
    code.open_file("out")
    backend = get_backend(language)
    backend.begin_file()
    scheduler = EmissionScheduler()
    return TypeEmitter(ReferenceResolver(DOCUMENT), scheduler, backend, code), scheduler, code


def output_of(code):
    name = code.close_file()
    return code.files[name]


class TestParseDescription:
    @pytest.mark.parametrize(
        "text,default",
        [
            ("Number of replicas. Defaults to 1.", "1."),
            ("Type of deployment. Default is RollingUpdate.", "RollingUpdate."),
            ("Defaults to 10 seconds. Minimum value is 1.", "10 seconds. Minimum value is 1."),
            ("Defaults to foo.\nDefault is bar.", "foo."),
            ("The name of the object.", None),
        ],
    )
    def test_default_capture(self, text, default):
        assert parse_description(text) == Description(text=text, default=default)

    @pytest.mark.parametrize("text", [None, ""])
    def test_no_description(self, text):
        assert parse_description(text) is None


class TestBuildDeclaration:
    def test_struct_fields_follow_document_order(self):
        emitter, _, _ = make_emitter()
        schema = {
            "properties": {
                "zeta": {"type": "string"},
                "alpha": {"type": "integer", "description": "Alpha. Defaults to 3."},
                "mid": {"type": "boolean"},
            },
            "required": ["mid", "zeta"],
        }

        struct = emitter.build_declaration("Thing", schema)

        assert isinstance(struct, StructDef)
        assert [f.name for f in struct.fields] == ["zeta", "alpha", "mid"]
        assert [f.is_required for f in struct.fields] == [True, False, True]
        assert struct.fields[1].type_ref == TypeRef(TypeKind.NUMBER)
        assert struct.fields[1].description.default == "3."

    def test_struct_without_required_list(self):
        emitter, _, _ = make_emitter()
        struct = emitter.build_declaration("Thing", {"properties": {"a": {}}, "required": "a"})
        assert struct.fields[0].is_required is False

    def test_empty_properties_is_a_struct(self):
        emitter, _, _ = make_emitter()
        struct = emitter.build_declaration("Empty", {"properties": {}})
        assert struct == StructDef(name="Empty", fields=[], description=None)

    def test_alias(self):
        emitter, _, _ = make_emitter()
        alias = emitter.build_declaration("Time", {"type": "string", "format": "date-time", "description": "Time."})
        assert alias == AliasDef(name="Time", target=TypeRef(TypeKind.TIMESTAMP), description=Description("Time."))

    def test_alias_of_reference_schedules_target(self):
        emitter, scheduler, _ = make_emitter()
        alias = emitter.build_declaration("FooAlias", {"$ref": "#/definitions/io.k8s.Foo"})
        assert alias.target == TypeRef(TypeKind.REFERENCE, name="Foo")
        assert scheduler.pending == ["Foo"]

    def test_union(self):
        emitter, _, _ = make_emitter()
        union = emitter.build_declaration("IntOrString", {"oneOf": [{"type": "string"}, {"type": "integer"}]})
        assert union == UnionDef(name="IntOrString", variants=[TypeKind.STRING, TypeKind.NUMBER])

    @pytest.mark.parametrize(
        "schema",
        [
            {"oneOf": [{"type": "string"}], "properties": {}},
            {"$ref": "#/definitions/io.k8s.Bar", "properties": {"a": {}}},
            {"$ref": "#/definitions/io.k8s.Bar", "oneOf": [{"type": "string"}]},
        ],
    )
    def test_mixed_discriminators_are_rejected(self, schema):
        emitter, _, _ = make_emitter()
        with pytest.raises(UnsupportedSchemaTypeError, match="mixes"):
            emitter.build_declaration("Mixed", schema)


class TestUnionModeler:
    def test_one_factory_per_variant(self):
        union = UnionModeler().model("Value", {"oneOf": [{"type": "boolean"}, {"type": "string"}, {"type": "number"}]})
        assert union.variants == [TypeKind.BOOLEAN, TypeKind.STRING, TypeKind.NUMBER]

    def test_integer_and_number_share_a_factory(self):
        union = UnionModeler().model("Value", {"oneOf": [{"type": "integer"}, {"type": "number"}]})
        assert union.variants == [TypeKind.NUMBER]

    @pytest.mark.parametrize(
        "variant",
        [
            {"type": "object"},
            {"type": "array", "items": {"type": "string"}},
            {"$ref": "#/definitions/io.k8s.Bar"},
        ],
    )
    def test_non_scalar_variant_is_rejected(self, variant):
        with pytest.raises(UnsupportedUnionVariantError):
            UnionModeler().model("Value", {"oneOf": [{"type": "string"}, variant]})

    def test_empty_one_of_is_rejected(self):
        with pytest.raises(UnsupportedUnionVariantError):
            UnionModeler().model("Value", {"oneOf": []})


class TestEmitType:
    def test_struct_output(self):
        emitter, _, code = make_emitter()
        emitter.emit_type(
            "Spec",
            {
                "description": "Spec of a thing.",
                "properties": {
                    "replicas": {"type": "integer", "description": "Number of replicas. Defaults to 1."},
                    "name": {"type": "string"},
                },
                "required": ["name"],
            },
        )
        out = output_of(code)

        assert "/**\n * Spec of a thing.\n */\nexport interface Spec {" in out
        assert "  /**\n   * Number of replicas. Defaults to 1.\n   * @default 1.\n   */\n  readonly replicas?: number;" in out
        assert "  readonly name: string;" in out

    def test_referenced_types_are_deferred(self):
        emitter, scheduler, code = make_emitter()
        emitter.emit_type("Holder", {"properties": {"foo": {"$ref": "#/definitions/io.k8s.Foo"}}})
        assert scheduler.pending == ["Foo"]

        scheduler.drain()
        out = output_of(code)

        assert scheduler.emitted == ["Foo", "Bar"]
        assert out.index("export interface Holder") < out.index("export interface Foo") < out.index("export type Bar = string;")

    def test_self_reference_is_emitted_once(self):
        emitter, scheduler, code = make_emitter()
        emitter.emit_type("Tree", {"properties": {"root": {"$ref": "#/definitions/io.k8s.Node"}}})
        scheduler.drain()
        out = output_of(code)

        assert out.count("export interface Node {") == 1
        assert "  readonly children?: Node[];" in out

    def test_union_output(self):
        emitter, _, code = make_emitter()
        emitter.emit_type("IntOrString", {"oneOf": [{"type": "string"}, {"type": "integer"}]})
        out = output_of(code)

        assert "export class IntOrString {" in out
        assert "  public static fromString(value: string): IntOrString {" in out
        assert "  public static fromNumber(value: number): IntOrString {" in out
        assert out.count("public static") == 2
        assert "  private constructor(public readonly value: string | number) {" in out


class TestMalformedStructs:
    def test_boolean_property_schema(self):
        emitter, _, _ = make_emitter()
        with pytest.raises(UnsupportedSchemaTypeError) as exc_info:
            emitter.build_declaration("Thing", {"properties": {"anything": True}})
        assert exc_info.value.schema_type is True

    def test_properties_that_is_not_a_map(self):
        emitter, _, _ = make_emitter()
        with pytest.raises(UnsupportedSchemaTypeError, match="Thing"):
            emitter.build_declaration("Thing", {"properties": ["a", "b"]})

    def test_unusable_required_entries_are_ignored(self):
        emitter, _, _ = make_emitter()
        struct = emitter.build_declaration("Thing", {"properties": {"a": {}}, "required": [{"a": 1}, "a"]})
        assert struct.fields[0].is_required is True

    @pytest.mark.parametrize("text", [5, ["Defaults to 1."], {"text": "x"}])
    def test_non_string_description(self, text):
        assert parse_description(text) is None
