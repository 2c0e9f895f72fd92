#!/usr/bin/env python3
"""
Rust to TypeScript Translator

This translator reads Rust sources and emits TypeScript declarations for
every struct, enum, const and type alias marked with #[tsync], following
the JSON shapes serde produces for them.

Key features:
- serde rename / rename_all / flatten / skip support
- Internally, adjacently and un-tagged enums as discriminated unions
- Ambient (.d.ts) output and optional const enums
- Refuses to overwrite files it did not generate

Usage:
    python -m rs2ts.translator -i src/ -o types.d.ts

The translator uses a modular architecture with separate packages for:
- lexer: Tokenization (tokens.py, lexer.py)
- parser: AST nodes and parsing (ast_nodes.py, parser.py)
- type_system: Type mapping (mappings.py)
- codegen: Code generation (generator.py + specialized generators)
"""

import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .lexer import Lexer
from .parser import Parser
from .codegen import BuildSettings, TypeScriptCodeGenerator, GENERATED_MARKER
from .codegen.diagnostics import TranspilerDiagnostics


RUST_SUFFIX = '.rs'


class OutputConflictError(Exception):
    """The output path exists and was not generated by this tool."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f'Refusing to write {path}: {reason}')


class RustToTypeScriptTranslator:
    """Main translator class that orchestrates the conversion process."""

    def __init__(self, settings: Optional[BuildSettings] = None, verbose: bool = False):
        self.settings = settings or BuildSettings()
        self.diagnostics = TranspilerDiagnostics(verbose=verbose or self.settings.debug)
        self.generator = TypeScriptCodeGenerator(self.settings, self.diagnostics)
        self.generator.write_header()

    @property
    def unprocessed(self) -> List[str]:
        return self.generator.unprocessed

    @property
    def output(self) -> str:
        return self.generator.output

    def process_file(self, filepath: Path) -> None:
        """Translate the exported declarations of a single Rust file."""
        self.diagnostics.current_file = str(filepath)
        if self.settings.debug:
            print(f'processing rust file: {filepath}')

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                source = f.read()
            tokens = Lexer(source).tokenize()
            ast = Parser(tokens).parse()
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
            self.diagnostics.warn_parse_failure(str(filepath), str(e))
            self.generator.add_unprocessed(str(filepath))
            return

        self.generator.generate(ast.items)

    def process_path(self, input_path: Path) -> None:
        """Translate a file, or every Rust file below a directory in sorted order."""
        if not input_path.exists():
            self.diagnostics.warn_missing_path(str(input_path))
            self.generator.add_unprocessed(str(input_path))
            return

        if input_path.is_file():
            self.process_file(input_path)
            return

        for rs_file in discover_sources(input_path):
            self.process_file(rs_file)

    def process_paths(self, input_paths: Iterable[Path]) -> str:
        """Translate every input in the order given and return the generated text."""
        for input_path in input_paths:
            self.process_path(Path(input_path))
        return self.output

    def write_output(self, output_path: Path) -> None:
        """Write the generated text, refusing to clobber files this tool did not create."""
        check_output_path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.output)
        print(f'Written: {output_path}')


def discover_sources(directory: Path) -> List[Path]:
    """All .rs files below a directory, in a stable order."""
    return sorted(
        path for path in directory.rglob('*')
        if path.is_file() and path.suffix.lower() == RUST_SUFFIX
    )


def check_output_path(output_path: Path) -> None:
    """Raise OutputConflictError unless output_path is absent or carries the generated marker."""
    if not output_path.exists():
        return
    if output_path.is_dir():
        raise OutputConflictError(output_path, 'it is a directory')

    try:
        with open(output_path, 'r', encoding='utf-8') as f:
            first_line = f.readline().rstrip('\r\n')
    except (OSError, UnicodeDecodeError) as e:
        raise OutputConflictError(output_path, f'it could not be read ({e})') from e

    if first_line != GENERATED_MARKER:
        raise OutputConflictError(output_path, 'it was not generated by rs2ts')


def load_config(config_path: Optional[Path]) -> dict:
    """Load the optional JSON settings file; problems are reported and ignored."""
    if config_path is None:
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f'Warning: Failed to load {config_path}: {e}')
        return {}

    if not isinstance(config, dict):
        print(f'Warning: Ignoring {config_path}: expected a JSON object')
        return {}
    return config


def build_settings(
    output: Path,
    debug: bool = False,
    enable_const_enums: bool = False,
    config: Optional[dict] = None,
) -> BuildSettings:
    """Combine config file values with command line flags; flags win."""
    config = config or {}
    settings = BuildSettings(
        uses_type_interface=str(output).endswith('.d.ts'),
        enable_const_enums=bool(config.get('enable_const_enums', False)),
        debug=bool(config.get('debug', False)),
    )
    export_marker = config.get('export_marker')
    if isinstance(export_marker, str) and export_marker:
        settings.export_marker = export_marker
    if debug:
        settings.debug = True
    if enable_const_enums:
        settings.enable_const_enums = True
    return settings


def generate_typescript_defs(
    inputs: List[Path],
    output: Path,
    debug: bool = False,
    enable_const_enums: bool = False,
    config: Optional[dict] = None,
) -> Tuple[str, List[str]]:
    """
    Translate the inputs and write the result to output.

    In debug mode the text is printed instead of written. Returns the
    generated text and the unprocessed files and declarations.
    """
    settings = build_settings(output, debug, enable_const_enums, config)
    translator = RustToTypeScriptTranslator(settings)
    text = translator.process_paths(inputs)

    if settings.debug:
        print('======================================')
        print('FINAL FILE:')
        print('======================================')
        print(text)
        print('======================================')
        print('Note: Nothing is written in debug mode')
        print('======================================')
    else:
        translator.write_output(output)

    translator.diagnostics.print_summary()
    return text, list(translator.unprocessed)


# =============================================================================
# CLI INTERFACE
# =============================================================================

def main():
    import argparse

    parser = argparse.ArgumentParser(description='Rust to TypeScript declaration generator')
    parser.add_argument('-i', '--input', action='append', required=True, metavar='PATH',
                        help='Input Rust file or directory (repeatable)')
    parser.add_argument('-o', '--output', required=True,
                        help='Output file (.ts, or .d.ts for ambient declarations)')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Print progress and the generated text instead of writing it')
    parser.add_argument('--enable-const-enums', action='store_true',
                        help='Render unit-only enums as const enums')
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='JSON file with enable_const_enums, export_marker and debug')

    args = parser.parse_args()

    config = load_config(Path(args.config) if args.config else None)
    try:
        _, unprocessed = generate_typescript_defs(
            [Path(p) for p in args.input],
            Path(args.output),
            debug=args.debug,
            enable_const_enums=args.enable_const_enums,
            config=config,
        )
    except OutputConflictError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if unprocessed:
        print('Could not parse the following files:')
        for item in unprocessed:
            print(f'  {item}')


if __name__ == '__main__':
    main()
