"""
Test suite for the session driver and command-line entry point
"""

import io

import pytest

from bincalc import EvaluatorConfig, ParseError, RangeError, Session, format_error
from bincalc.cli import build_parser, main


def scripted(lines):
    """A read_line stand-in that replays lines, then signals end of input"""
    pending = list(lines)

    def read_line(prompt):
        if not pending:
            raise EOFError
        item = pending.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item
    return read_line


def make_session(mode, **kwargs):
    out, err = io.StringIO(), io.StringIO()
    return Session(EvaluatorConfig(mode, **kwargs), out=out, err=err), out, err


class TestFormatError:
    """Caret pointer under the failing column"""

    def test_caret_offset(self):
        assert format_error(ParseError("Unexpected end of input", 4)) == \
            "      ^\nParse error: Unexpected end of input"

    def test_kind_label(self):
        text = format_error(RangeError("too big", 0))
        assert text == "  ^\nValue out of range: too big"

    def test_custom_indent(self):
        assert format_error(ParseError("x", 1), indent=0) == " ^\nParse error: x"


class TestSession:
    """Test line handling"""

    def test_success(self):
        session, out, err = make_session('s32')
        assert session.handle_input('2 + 3 * 4') is True
        assert out.getvalue() == '14 (x0000000e)\n'
        assert err.getvalue() == ''

    def test_failure(self):
        session, out, err = make_session('s32')
        assert session.handle_input('2 + ') is False
        assert out.getvalue() == ''
        assert err.getvalue() == '      ^\nParse error: Unexpected end of input\n'

    def test_run_loop(self):
        session, out, err = make_session('s16')
        status = session.run(scripted(['32767 + 1', '', '   ', '1 / 0', 'x7fff']))
        assert status == 0
        assert out.getvalue() == '-32768 (x8000)\n32767 (x7fff)\n'
        assert 'Division by zero' in err.getvalue()

    def test_exit_command(self):
        session, out, _ = make_session('u8')
        session.run(scripted(['1', 'exit', '2']))
        assert out.getvalue() == '1 (x01)\n'

    def test_quit_command(self):
        session, out, _ = make_session('u8')
        session.run(scripted(['quit', '2']))
        assert out.getvalue() == ''

    def test_keyboard_interrupt_continues(self):
        session, out, _ = make_session('u8')
        session.run(scripted([KeyboardInterrupt(), '3']))
        assert out.getvalue() == '\n3 (x03)\n'

    def test_strips_line_terminator(self):
        session, out, _ = make_session('u8')
        session.run(scripted(['4\r\n']))
        assert out.getvalue() == '4 (x04)\n'

    def test_errors_do_not_end_session(self):
        session, out, err = make_session('u16')
        session.run(scripted(['-1', '(', '1 + 1']))
        assert out.getvalue() == '2 (x0002)\n'
        assert err.getvalue().count('^') == 2


class TestCommandLine:
    """Test the bincalc entry point"""

    def test_expression(self, capsys):
        assert main(['-e', '2 + 3 * 4', 's32']) == 0
        assert capsys.readouterr().out == '14 (x0000000e)\n'

    def test_expression_error(self, capsys):
        assert main(['-e', '2 +', 'u8']) == 1
        captured = capsys.readouterr()
        assert captured.out == ''
        assert '^' in captured.err
        assert 'Parse error' in captured.err

    def test_verbose(self, capsys):
        assert main(['-v', '-e', '~-5', 's16']) == 0
        assert capsys.readouterr().out.splitlines() == [
            '~(-5) = 4 (~xfffb = x0004)',
            '4 (x0004)',
        ]

    def test_float_mode(self, capsys):
        assert main(['-e', '1 / 0', 'f64']) == 0
        assert capsys.readouterr().out == 'inf (x7ff0000000000000)\n'

    def test_interactive(self, capsys, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO('1 + 1\nexit\n'))
        assert main(['u32']) == 0
        assert '2 (x00000002)' in capsys.readouterr().out

    def test_max_depth(self, capsys):
        assert main(['--max-depth', '1', '-e', '((1))', 's8']) == 1
        assert 'Nesting deeper than 1 levels' in capsys.readouterr().err

    def test_deep_mixed_expression_is_reported(self, capsys):
        text = '1|1^1&1<<1+1*(' * 150 + '1' + ')' * 150
        assert main(['-e', text, 's32']) == 1
        err = capsys.readouterr().err
        assert 'Parse error: Nesting deeper than 200 levels' in err
        assert 'Traceback' not in err

    def test_unknown_mode(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['s128'])
        assert exc.value.code == 2

    def test_missing_mode(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2

    def test_bad_max_depth(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['--max-depth', '0', 's8'])
        assert exc.value.code == 2

    def test_help_lists_modes(self):
        help_text = build_parser().format_help()
        assert '  u16  16 bit unsigned encoding' in help_text
        assert '  f64  64 bit floating-point encoding' in help_text
        assert '-v, --verbose' in help_text
