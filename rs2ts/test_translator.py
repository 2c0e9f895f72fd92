#!/usr/bin/env python3
"""
Unit tests for the rs2ts translator.

Run with: python3 -m pytest rs2ts/test_translator.py
   or: cd .. && python3 rs2ts/test_translator.py
"""

import sys
import os
# Add parent directory to path so the tests run without installing the package
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from rs2ts.lexer import Lexer
from rs2ts.parser import Parser
from rs2ts.codegen import BuildSettings, GENERATED_MARKER, TranspilerDiagnostics, translate
from rs2ts.translator import (
    OutputConflictError,
    RustToTypeScriptTranslator,
    build_settings,
    check_output_path,
    generate_typescript_defs,
    load_config,
)


def translate_source(source, diagnostics=None, **settings):
    """Run the whole pipeline on a Rust snippet."""
    ast = Parser(Lexer(source).tokenize()).parse()
    return translate(ast.items, BuildSettings(**settings), diagnostics)


class TestStructs(unittest.TestCase):
    """Test struct and record generation."""

    def test_interface_with_docs_and_casing(self):
        source = '''
        /// A book in the catalog
        #[tsync]
        #[serde(rename_all = "camelCase")]
        pub struct Book {
            pub name: String,
            /// Reviews left by readers
            pub user_reviews: Option<Vec<String>>,
        }
        '''
        output, unprocessed = translate_source(source)

        expected = (
            f'{GENERATED_MARKER}\n'
            '\n'
            '/** A book in the catalog */\n'
            'export interface Book {\n'
            '  name: string;\n'
            '  /** Reviews left by readers */\n'
            '  userReviews?: string[];\n'
            '}\n'
        )
        self.assertEqual(output, expected)
        self.assertEqual(unprocessed, [])

    def test_casing_leaves_declaration_name_alone(self):
        source = '''
        #[tsync]
        #[serde(rename_all = "camelCase")]
        struct user_profile {
            user_reviews: u32,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('export interface user_profile {', output)
        self.assertIn('  userReviews: number;', output)
        self.assertNotIn('user_reviews', output)

    def test_flattened_field_becomes_intersection(self):
        source = '''
        #[tsync]
        struct Name {
            #[serde(flatten)]
            x: X,
            y: String,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('export type Name = X & {\n  y: string;\n}\n', output)
        self.assertNotIn('interface', output)

    def test_multiple_flattened_fields_keep_order(self):
        source = '''
        #[tsync]
        struct Combined {
            #[serde(flatten)]
            second: Second,
            plain: bool,
            #[serde(flatten)]
            first: First,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('export type Combined = Second & First & {\n  plain: boolean;\n}\n', output)

    def test_flattened_only_struct_has_empty_body(self):
        source = '''
        #[tsync]
        struct Wrapper {
            #[serde(flatten)]
            inner: Inner,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('export type Wrapper = Inner & {}\n', output)

    def test_empty_struct(self):
        output, _ = translate_source('#[tsync]\nstruct Empty {}\n')

        self.assertIn('export interface Empty {}\n', output)

    def test_field_rename_skip_and_optional(self):
        source = '''
        #[tsync]
        #[serde(rename_all = "camelCase")]
        struct Account {
            #[serde(rename = "ID")]
            account_id: u64,
            #[serde(skip)]
            password_hash: String,
            #[serde(skip_serializing_if = "Vec::is_empty")]
            login_times: Vec<i64>,
            #[serde(rename = "display-name")]
            display_name: String,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  ID: number;\n', output)
        self.assertNotIn('password', output.lower())
        self.assertIn('  loginTimes?: number[];\n', output)
        self.assertIn('  "display-name": string;\n', output)

    def test_generic_struct(self):
        source = '''
        #[tsync]
        struct Paginated<'a, T: Clone, const N: usize> where T: Send {
            items: Vec<T>,
            lookup: HashMap<String, T>,
            cursor: Option<&'a str>,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('export interface Paginated<T> {\n', output)
        self.assertIn('  items: T[];\n', output)
        self.assertIn('  lookup: Record<string, T>;\n', output)
        self.assertIn('  cursor?: string;\n', output)

    def test_tuple_and_unit_structs(self):
        source = '''
        #[tsync]
        struct UserId(u64);
        #[tsync]
        struct Point(pub f32, pub f32);
        #[tsync]
        struct Marker;
        #[tsync]
        struct MaybeName(Option<String>);
        '''
        output, _ = translate_source(source)

        self.assertIn('export type UserId = number;\n', output)
        self.assertIn('export type Point = [number, number];\n', output)
        self.assertIn('export type Marker = null;\n', output)
        self.assertIn('export type MaybeName = string | null;\n', output)

    def test_chrono_fields_are_strings(self):
        source = '''
        #[tsync]
        struct Event {
            at: chrono::DateTime<Utc>,
            offset: Option<DateTime<FixedOffset>>,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  at: string;\n', output)
        self.assertIn('  offset?: string;\n', output)
        self.assertNotIn('DateTime', output)

    def test_multi_line_field_docs(self):
        source = '''
        #[tsync]
        struct Doc {
            /// First line
            ///
            /// Third line
            value: i32,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn(
            '  /**\n'
            '   * First line\n'
            '   *\n'
            '   * Third line\n'
            '   */\n'
            '  value: number;\n',
            output,
        )


class TestEnums(unittest.TestCase):
    """Test enum generation for every tagging mode."""

    def test_internally_tagged_enum(self):
        source = '''
        #[tsync]
        #[serde(tag = "type")]
        enum BookType {
            #[serde(rename = "fiction")]
            Fiction { genre: String },
            #[serde(rename = "non-fiction")]
            NonFiction { subject: String },
        }
        '''
        output, _ = translate_source(source)

        expected = (
            '\n'
            'export type BookType =\n'
            '  | {\n'
            '      type: "fiction";\n'
            '      genre: string;\n'
            '    }\n'
            '  | {\n'
            '      type: "non-fiction";\n'
            '      subject: string;\n'
            '    };\n'
        )
        self.assertEqual(output, GENERATED_MARKER + '\n' + expected)

    def test_internally_tagged_unit_and_newtype_variants(self):
        source = '''
        #[tsync]
        #[serde(tag = "kind", rename_all = "snake_case")]
        enum Event {
            SessionStarted,
            UserJoined(User),
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  | { kind: "session_started" }\n', output)
        self.assertIn('  | { kind: "user_joined" } & User;\n', output)

    def test_unit_enum_is_string_union(self):
        source = '''
        /// Publication state
        #[tsync]
        #[serde(rename_all = "lowercase")]
        enum Status {
            /// Visible to everyone
            Published,
            Draft,
        }
        '''
        output, _ = translate_source(source)

        self.assertIn(
            '/** Publication state */\n'
            'export type Status =\n'
            '  /** Visible to everyone */\n'
            '  | "published"\n'
            '  | "draft";\n',
            output,
        )

    def test_const_enum(self):
        source = '''
        #[tsync]
        enum Color {
            Red,
            #[serde(rename = "verde")]
            Green,
            Blue = 7,
        }
        '''
        output, _ = translate_source(source, enable_const_enums=True)

        self.assertIn(
            'export const enum Color {\n'
            '  Red = "Red",\n'
            '  Green = "verde",\n'
            '  Blue = 7,\n'
            '}\n',
            output,
        )

    def test_const_enum_ignored_for_payload_enums(self):
        source = '''
        #[tsync]
        enum Shape {
            Empty,
            Circle(f64),
        }
        '''
        output, _ = translate_source(source, enable_const_enums=True)

        self.assertNotIn('const enum', output)
        self.assertIn('export type Shape =\n  | "Empty"\n  | [number];\n', output)

    def test_newtype_variants_stay_distinct_tuples(self):
        source = '''
        #[tsync]
        enum Shape {
            Empty,
            Circle(f64),
            Square(f64),
            Label(Option<String>),
        }
        '''
        output, _ = translate_source(source)

        self.assertIn(
            'export type Shape =\n'
            '  | "Empty"\n'
            '  | [number]\n'
            '  | [number]\n'
            '  | [string | null];\n',
            output,
        )

    def test_untagged_tuple_variants(self):
        source = '''
        #[tsync]
        enum Coordinate {
            Flat(i32, i32),
            Deep(i32, i32, i32),
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  | [number, number]\n  | [number, number, number];\n', output)

    def test_external_struct_variant(self):
        source = '''
        #[tsync]
        enum Request {
            Get { url: String },
        }
        '''
        output, _ = translate_source(source)

        self.assertIn(
            'export type Request =\n'
            '  | {\n'
            '      Get: {\n'
            '        url: string;\n'
            '      };\n'
            '    };\n',
            output,
        )

    def test_adjacently_tagged_enum(self):
        source = '''
        #[tsync]
        #[serde(tag = "t", content = "c")]
        enum Message {
            Ping,
            Text(String),
            Pair(u8, u8),
            Move { x: i32 },
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  | { t: "Ping" }\n', output)
        self.assertIn('  | { t: "Text"; c: string }\n', output)
        self.assertIn('  | { t: "Pair"; c: [number, number] }\n', output)
        self.assertIn(
            '  | {\n'
            '      t: "Move";\n'
            '      c: {\n'
            '        x: number;\n'
            '      };\n'
            '    };\n',
            output,
        )

    def test_serde_untagged_enum(self):
        source = '''
        #[tsync]
        #[serde(untagged)]
        enum Value {
            Missing,
            Number(f64),
            Object { key: String },
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('  | null\n', output)
        self.assertIn('  | number\n', output)
        self.assertIn('  | {\n      key: string;\n    };\n', output)

    def test_variant_rename_all_applies_to_its_fields(self):
        source = '''
        #[tsync]
        #[serde(tag = "type")]
        enum Shape {
            #[serde(rename_all = "camelCase")]
            Rectangle { side_length: f64 },
        }
        '''
        output, _ = translate_source(source)

        self.assertIn('      sideLength: number;\n', output)
        self.assertIn('      type: "Rectangle";\n', output)

    def test_skipped_variant_is_omitted(self):
        source = '''
        #[tsync]
        enum Level {
            Low,
            #[serde(skip)]
            Internal,
            High,
        }
        '''
        diagnostics = TranspilerDiagnostics()
        output, _ = translate_source(source, diagnostics)

        self.assertNotIn('Internal', output)
        self.assertIn('  | "Low"\n  | "High";\n', output)
        self.assertEqual([d.code for d in diagnostics.diagnostics], ['I001'])

    def test_variant_order_is_preserved(self):
        source = '''
        #[tsync]
        enum Letter { C, A, B }
        '''
        output, _ = translate_source(source)

        self.assertLess(output.index('"C"'), output.index('"A"'))
        self.assertLess(output.index('"A"'), output.index('"B"'))


class TestConstsAndAliases(unittest.TestCase):
    """Test const and type alias generation."""

    def test_literal_consts(self):
        source = '''
        #[tsync]
        const MAX_SIZE: u32 = 1_000u32;
        #[tsync]
        const NAME: &str = "rs2ts \\"beta\\"";
        #[tsync]
        const RATIO: f64 = -2.5f64;
        #[tsync]
        const ENABLED: bool = true;
        #[tsync]
        const PRIMES: [u8; 3] = [2, 3, 5];
        #[tsync]
        const MASK: u8 = 0xFF_u8;
        '''
        output, unprocessed = translate_source(source)

        self.assertIn('export const MAX_SIZE: number = 1000;\n', output)
        self.assertIn('export const NAME: string = "rs2ts \\"beta\\"";\n', output)
        self.assertIn('export const RATIO: number = -2.5;\n', output)
        self.assertIn('export const ENABLED: boolean = true;\n', output)
        self.assertIn('export const PRIMES: number[] = [2, 3, 5];\n', output)
        self.assertIn('export const MASK: number = 0xFF;\n', output)
        self.assertEqual(unprocessed, [])

    def test_non_literal_const_is_unprocessed(self):
        source = '''
        #[tsync]
        const COMPUTED: u32 = 1 + 2;
        #[tsync]
        const LOOKUP: Settings = Settings::new();
        #[tsync]
        const KEPT: i32 = 3;
        '''
        diagnostics = TranspilerDiagnostics()
        output, unprocessed = translate_source(source, diagnostics)

        self.assertNotIn('COMPUTED', output)
        self.assertNotIn('LOOKUP', output)
        self.assertIn('export const KEPT: number = 3;\n', output)
        self.assertEqual(unprocessed, ['const COMPUTED', 'const LOOKUP'])
        self.assertEqual([d.code for d in diagnostics.warnings], ['W003', 'W003'])

    def test_none_const_is_null(self):
        source = '''
        #[tsync]
        const NONE_VAL: Option<u32> = None;
        #[tsync]
        const NO_NAME: Option<String> = Option::None;
        #[tsync]
        const PAIRS: [Option<u8>; 2] = [Some(1), None];
        '''
        output, unprocessed = translate_source(source)

        self.assertIn('export const NONE_VAL: number | null = null;\n', output)
        self.assertIn('export const NO_NAME: string | null = null;\n', output)
        self.assertNotIn('PAIRS', output)
        self.assertEqual(unprocessed, ['const PAIRS'])

    def test_ambient_consts_are_declared(self):
        source = '''
        /// Upper bound
        #[tsync]
        const LIMIT: usize = compute_limit();
        '''
        output, unprocessed = translate_source(source, uses_type_interface=True)

        self.assertIn('/** Upper bound */\ndeclare const LIMIT: number;\n', output)
        self.assertEqual(unprocessed, [])

    def test_type_alias(self):
        source = '''
        #[tsync]
        type UserId = u64;
        #[tsync]
        pub type Page<T> = Vec<Option<T>>;
        #[tsync]
        type Lookup = std::collections::BTreeMap<String, (u8, bool)>;
        '''
        output, _ = translate_source(source)

        self.assertIn('export type UserId = number;\n', output)
        self.assertIn('export type Page<T> = (T | null)[];\n', output)
        self.assertIn('export type Lookup = Record<string, [number, boolean]>;\n', output)


class TestOutputContract(unittest.TestCase):
    """Test properties of the generated file as a whole."""

    SOURCE = '''
    //! Crate docs are ignored
    use serde::Serialize;

    #[tsync]
    struct First { a: i32 }

    struct NotExported { b: i32 }

    impl First {
        fn new() -> Self { First { a: 1 } }
    }

    #[tsync]
    enum Second { X, Y }

    #[tsync]
    type Third = First;
    '''

    def test_marker_is_first_line(self):
        output, _ = translate_source(self.SOURCE)

        self.assertEqual(output.splitlines()[0], GENERATED_MARKER)

    def test_only_marked_declarations_in_source_order(self):
        output, _ = translate_source(self.SOURCE)

        self.assertNotIn('NotExported', output)
        self.assertLess(output.index('interface First'), output.index('type Second'))
        self.assertLess(output.index('type Second'), output.index('type Third'))

    def test_one_blank_line_between_declarations(self):
        output, _ = translate_source(self.SOURCE)

        self.assertIn('}\n\nexport type Second', output)
        self.assertIn(';\n\nexport type Third', output)
        self.assertNotIn('\n\n\n', output)

    def test_ambient_mode_drops_export(self):
        output, _ = translate_source(self.SOURCE, uses_type_interface=True)

        self.assertNotIn('export', output)
        self.assertIn('\ninterface First {\n', output)
        self.assertIn('\ntype Second =\n', output)

    def test_ambient_const_enum(self):
        output, _ = translate_source(self.SOURCE, uses_type_interface=True, enable_const_enums=True)

        self.assertIn('declare const enum Second {\n', output)

    def test_custom_export_marker(self):
        source = '''
        #[ts_export]
        struct Chosen { a: i32 }
        #[tsync]
        struct Ignored { b: i32 }
        '''
        output, _ = translate_source(source, export_marker='ts_export')

        self.assertIn('Chosen', output)
        self.assertNotIn('Ignored', output)

    def test_translation_is_idempotent(self):
        first, _ = translate_source(self.SOURCE)
        second, _ = translate_source(self.SOURCE)

        self.assertEqual(first, second)

    def test_debug_messages(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            translate_source(self.SOURCE, debug=True)

        self.assertIn('Encountered #[tsync] struct: First', buffer.getvalue())
        self.assertIn('Encountered non-tsync struct: NotExported', buffer.getvalue())

    def test_no_debug_messages_by_default(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            translate_source(self.SOURCE)

        self.assertEqual(buffer.getvalue(), '')

    def test_unmappable_types_are_reported(self):
        source = '''
        #[tsync]
        struct Handler {
            callback: fn(u32) -> u32,
        }
        '''
        diagnostics = TranspilerDiagnostics()
        output, _ = translate_source(source, diagnostics)

        self.assertIn('  callback: fn(u32) -> u32;\n', output)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W002'])
        self.assertIn('Handler', diagnostics.warnings[0].message)


class TestFiles(unittest.TestCase):
    """Test file discovery, failure recording and output writing."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, relative, text):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path

    def test_directory_is_walked_in_sorted_order(self):
        self.write('src/b.rs', '#[tsync]\nstruct Second { a: i32 }\n')
        self.write('src/a.rs', '#[tsync]\nstruct First { a: i32 }\n')
        self.write('src/nested/c.RS', '#[tsync]\nstruct Third { a: i32 }\n')
        self.write('src/notes.txt', '#[tsync]\nstruct Ignored { a: i32 }\n')

        translator = RustToTypeScriptTranslator()
        output = translator.process_paths([self.root / 'src'])

        self.assertNotIn('Ignored', output)
        self.assertLess(output.index('First'), output.index('Second'))
        self.assertLess(output.index('Second'), output.index('Third'))

    def test_parse_failure_is_recorded_and_run_continues(self):
        broken = self.write('src/broken.rs', '#[tsync]\nstruct Broken { name: }\n')
        self.write('src/good.rs', '#[tsync]\nstruct Good { name: String }\n')

        translator = RustToTypeScriptTranslator()
        output = translator.process_paths([self.root / 'src'])

        self.assertIn('export interface Good', output)
        self.assertNotIn('Broken', output)
        self.assertEqual(translator.unprocessed, [str(broken)])
        self.assertEqual([d.code for d in translator.diagnostics.warnings], ['W001'])

    def test_missing_input_is_recorded(self):
        missing = self.root / 'does-not-exist.rs'

        translator = RustToTypeScriptTranslator()
        translator.process_paths([missing])

        self.assertEqual(translator.unprocessed, [str(missing)])
        self.assertEqual([d.code for d in translator.diagnostics.warnings], ['W004'])

    def test_output_conflict_for_hand_written_file(self):
        output = self.write('types.ts', 'export type Handwritten = string;\n')

        with self.assertRaises(OutputConflictError):
            check_output_path(output)

    def test_output_conflict_for_directory(self):
        (self.root / 'out.ts').mkdir()

        with self.assertRaises(OutputConflictError):
            check_output_path(self.root / 'out.ts')

    def test_generate_writes_and_regenerates(self):
        self.write('src/lib.rs', '#[tsync]\nconst LIMIT: u8 = 3;\n')
        output = self.root / 'out' / 'types.d.ts'

        with redirect_stdout(io.StringIO()):
            text, unprocessed = generate_typescript_defs([self.root / 'src'], output)
            generate_typescript_defs([self.root / 'src'], output)

        self.assertEqual(unprocessed, [])
        self.assertEqual(output.read_text(encoding='utf-8'), text)
        self.assertIn('\ndeclare const LIMIT: number;\n', text)

    def test_conflict_aborts_before_writing(self):
        self.write('src/lib.rs', '#[tsync]\nstruct A { a: i32 }\n')
        output = self.write('types.ts', '// my own file\n')

        with redirect_stdout(io.StringIO()):
            with self.assertRaises(OutputConflictError):
                generate_typescript_defs([self.root / 'src'], output)

        self.assertEqual(output.read_text(encoding='utf-8'), '// my own file\n')

    def test_debug_mode_does_not_write(self):
        self.write('src/lib.rs', '#[tsync]\nstruct A { a: i32 }\n')
        output = self.root / 'types.ts'

        buffer = io.StringIO()
        with redirect_stdout(buffer):
            generate_typescript_defs([self.root / 'src'], output, debug=True)

        self.assertFalse(output.exists())
        self.assertIn('export interface A', buffer.getvalue())

    def test_config_file_and_flags(self):
        config_path = self.write('rs2ts.json', json.dumps({'enable_const_enums': True, 'export_marker': 'ts'}))

        config = load_config(config_path)
        settings = build_settings(Path('types.d.ts'), config=config)

        self.assertTrue(settings.enable_const_enums)
        self.assertTrue(settings.uses_type_interface)
        self.assertEqual(settings.export_marker, 'ts')
        self.assertFalse(build_settings(Path('types.ts'), debug=False).debug)
        self.assertTrue(build_settings(Path('types.ts'), debug=True, config={'debug': False}).debug)

    def test_malformed_config_is_ignored(self):
        config_path = self.write('rs2ts.json', '{not json')

        buffer = io.StringIO()
        with redirect_stdout(buffer):
            config = load_config(config_path)

        self.assertEqual(config, {})
        self.assertIn('Warning', buffer.getvalue())


if __name__ == '__main__':
    # Run tests with verbosity
    unittest.main(verbosity=2)
