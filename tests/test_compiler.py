"""
Compiler Pipeline Test Suite
============================

End-to-end tests through RccCompiler and the convenience functions.
"""

import pytest
from rcc import RccError, compile_c, compile_file, RccCompiler, CompilerOptions
from rcc.tinyc.compiler import CompilerResult
from rcc.tinyc.lexer import CTokenType
from rcc.tinyc.errors import (
    TinyCError,
    CSyntaxError,
    CSemanticError,
    InvalidCharacterError,
    MismatchedParenthesesError,
    UndefinedSymbolError,
)


HELLO = "int main() { return 42; }\n"
HELLO_ASM = ".globl _main\n_main:\n    mov w0, 42\n    ret\n\n"


# =============================================================================
# Source Compilation Tests
# =============================================================================

class TestCompileSource:
    """Tests for compiling source strings."""

    def test_compile_c(self):
        """compile_c returns the assembly text."""
        assert compile_c(HELLO) == HELLO_ASM

    def test_result_fields(self):
        """A successful compile fills in every stage's output."""
        result = RccCompiler().compile_source(HELLO, "hello.c")
        assert isinstance(result, CompilerResult)
        assert result.success
        assert result.filename == "hello.c"
        assert result.assembly == HELLO_ASM
        assert result.ast.functions[0].name == "main"
        assert result.token_count == 10
        assert result.tokens == []

    def test_keep_tokens(self):
        """Tokens are kept only when asked for."""
        compiler = RccCompiler(CompilerOptions(keep_tokens=True))
        result = compiler.compile_source(HELLO, "hello.c")
        assert len(result.tokens) == 10
        assert result.tokens[0].type == CTokenType.INT
        assert result.tokens[-1].type == CTokenType.EOF

    def test_program_with_calls(self):
        """A multi-function program compiles."""
        source = """
            // helpers first: there are no forward declarations
            int seven() { return 7; }
            void nothing() { }

            /* entry point */
            int main() {
                return seven() * 6;
            }
        """
        asm = compile_c(source)
        assert asm.index("_seven:") < asm.index("_nothing:") < asm.index("_main:")
        assert "    bl _seven\n" in asm

    def test_deterministic(self):
        """Compiling twice gives identical output."""
        source = "int f() { return 1; } int main() { return (f() + 2) * 3; }"
        assert compile_c(source) == compile_c(source)

    def test_compiler_reuse(self):
        """One compiler instance keeps no state between programs."""
        compiler = RccCompiler()
        compiler.compile_source("int f() { return 1; }", "a.c")
        # 'f' from the previous program must not be visible
        with pytest.raises(UndefinedSymbolError):
            compiler.compile_source("int main() { return f(); }", "b.c")


# =============================================================================
# Error Propagation Tests
# =============================================================================

class TestCompileErrors:
    """Tests that each stage's first error reaches the caller."""

    def test_lexer_error(self):
        with pytest.raises(InvalidCharacterError):
            compile_c("int main() { return 1 % 2; }")

    def test_parser_error(self):
        with pytest.raises(MismatchedParenthesesError):
            compile_c("int main() { return (1 + 2; }")

    def test_semantic_error(self):
        with pytest.raises(UndefinedSymbolError):
            compile_c("int main() { return missing(); }")

    def test_error_hierarchy(self):
        """Every stage's errors are TinyCErrors and RccErrors."""
        for source, category in [
            ("int main() { return @; }", CSyntaxError),
            ("int main() { return 1 }", CSyntaxError),
            ("void main() { return 1; }", CSemanticError),
        ]:
            with pytest.raises(category) as exc_info:
                compile_c(source)
            assert isinstance(exc_info.value, TinyCError)
            assert isinstance(exc_info.value, RccError)

    def test_error_names_file(self):
        """Error messages start with file:line:column."""
        with pytest.raises(TinyCError) as exc_info:
            compile_c("int main() {\n    return nope();\n}", "prog.c")
        assert str(exc_info.value).startswith("prog.c:2:12: error: undefined symbol 'nope'")


# =============================================================================
# File Compilation Tests
# =============================================================================

class TestCompileFile:
    """Tests for compiling files."""

    def test_compile_file(self, tmp_path):
        """compile_file reads the source and returns assembly."""
        source = tmp_path / "hello.c"
        source.write_text(HELLO)
        assert compile_file(source) == HELLO_ASM

    def test_compile_file_writes_output(self, tmp_path):
        """An explicit output path receives the assembly."""
        source = tmp_path / "hello.c"
        source.write_text(HELLO)
        output = tmp_path / "out.s"
        compile_file(source, output)
        assert output.read_text() == HELLO_ASM

    def test_no_output_on_error(self, tmp_path):
        """Nothing is written when compilation fails."""
        source = tmp_path / "bad.c"
        source.write_text("int main() { return; }")
        output = tmp_path / "bad.s"
        with pytest.raises(CSemanticError):
            compile_file(source, output)
        assert not output.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RccCompiler().compile_file(tmp_path / "nope.c")

    def test_error_uses_path(self, tmp_path):
        """Errors are reported against the file's path."""
        source = tmp_path / "bad.c"
        source.write_text("int main() { return 1 2; }")
        with pytest.raises(TinyCError) as exc_info:
            RccCompiler().compile_file(source)
        assert exc_info.value.location.filename == str(source)

    def test_output_path_for(self):
        """The default output swaps the extension for .s."""
        compiler = RccCompiler()
        assert compiler.output_path_for("dir/hello.c").name == "hello.s"
        assert str(compiler.output_path_for("hello.c")) == "hello.s"

    def test_output_suffix_option(self):
        compiler = RccCompiler(CompilerOptions(output_suffix=".asm"))
        assert str(compiler.output_path_for("hello.c")) == "hello.asm"
