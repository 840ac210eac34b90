import os
import sys
import traceback

import colorama
from colorama import Fore, Style

from errors import LexError, PileError, SourceFileNotFound, TooManyArgs
from interpreter import Interpreter
from lexer import Lexer, tokenize
from literals import format_literal
from parser import parse
from tokens import BLOCK_OPENERS

EXIT_COMMANDS = (":q", ":quit", "quit", "exit")

_colorama_inited = False


def _ensure_colorama():
    global _colorama_inited
    if _colorama_inited:
        return
    _colorama_inited = True
    colorama.just_fix_windows_console()


def report_error(err, debug: bool = False):
    if debug:
        traceback.print_exc()
    _ensure_colorama()
    if isinstance(err, PileError):
        text = err.format()
    else:
        text = f"Internal error: {type(err).__name__}: {err}"
    if sys.stderr.isatty():
        text = f"{Fore.RED}{Style.BRIGHT}{text}{Style.RESET_ALL}"
    print(text, file=sys.stderr)


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t == "Push":
        value = node.value
        if value.__class__.__name__ == "Var":
            d["name"] = value.name
        else:
            d["value"] = str(value)
    elif t in ("UnaryOp", "BinaryOp"):
        d["op"] = node.op
    elif t in ("Bind", "Call"):
        d["name"] = node.name
    elif t == "If":
        d["conditions"] = [ast_to_dict(s) for s in node.conditions]
        d["then"] = [ast_to_dict(s) for s in node.then_body]
        d["elifs"] = [
            {"conditions": [ast_to_dict(s) for s in conds], "body": [ast_to_dict(s) for s in body]}
            for conds, body in node.elifs
        ]
        d["else"] = [ast_to_dict(s) for s in node.else_body]
    elif t == "While":
        d["conditions"] = [ast_to_dict(s) for s in node.conditions]
        d["body"] = [ast_to_dict(s) for s in node.body]
    elif t == "Procedure":
        d["name"] = node.name
        d["body"] = [ast_to_dict(s) for s in node.body]
    elif t == "Empty":
        pass
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                if not v:
                    lines.append(f"{sp}{k}: []")
                    continue
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def read_source(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (FileNotFoundError, IsADirectoryError):
        raise SourceFileNotFound(path) from None


def parse_source(source):
    return parse(tokenize(source))


def execute_source(source, interpreter):
    # lexer -> parser -> interpreter, stopping at the first error
    statements = parse_source(source)
    interpreter.interpret(statements)


def cmd_tokens(path, debug: bool = False):
    try:
        source = read_source(path)
        tokens = Lexer(source).tokenize()
    except PileError as e:
        report_error(e, debug)
        sys.exit(1)

    for tok in tokens:
        print(f"{tok.line}:{tok.column}  {tok!r}")


def cmd_parse(path, debug: bool = False):
    try:
        statements = parse_source(read_source(path))
    except PileError as e:
        report_error(e, debug)
        sys.exit(1)

    print(pretty([ast_to_dict(s) for s in statements]))


def cmd_run(path, debug: bool = False, trace: bool = False, max_steps=None):
    interpreter = Interpreter(max_steps=max_steps, trace=trace)
    try:
        execute_source(read_source(path), interpreter)
    except PileError as e:
        report_error(e, debug)
        sys.exit(1)


def _count_blocks_delta(source: str) -> int:
    # Block balancer for REPL multiline input: if/while/proc open, end closes.
    # Unlexable input counts as complete so the error gets reported.
    try:
        tokens = Lexer(source).tokenize()
    except LexError:
        return 0
    delta = 0
    for tok in tokens:
        if tok.type in BLOCK_OPENERS:
            delta += 1
        elif tok.type == "END":
            delta -= 1
    return delta


def show_stack(interpreter):
    if not interpreter.stack:
        print("<empty>")
        return
    print(" ".join(f'"{v}"' if isinstance(v, str) else format_literal(v) for v in interpreter.stack))


def cmd_repl(debug: bool = False, trace: bool = False, max_steps=None):
    # One interpreter for the whole session: stack, bindings and procedures persist.
    interpreter = Interpreter(max_steps=max_steps, trace=trace)

    print("Pile REPL. Type exit or :q to quit.")

    buffer_lines = []
    while True:
        prompt = "pile> " if not buffer_lines else "...> "
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines:
            if stripped in EXIT_COMMANDS:
                break
            if stripped == ":stack":
                show_stack(interpreter)
                continue
            if stripped == ":reset":
                interpreter.reset()
                continue
            if not stripped:
                continue

        buffer_lines.append(line)
        source = "\n".join(buffer_lines) + "\n"

        # Wait for block completion if blocks aren't closed yet.
        if _count_blocks_delta(source) > 0:
            continue

        buffer_lines = []
        try:
            execute_source(source, interpreter)
        except PileError as e:
            report_error(e, debug)
        except KeyboardInterrupt:
            print()
            report_error(PileError("interrupted"), debug)
        except Exception as e:
            report_error(e, debug)


def usage():
    print("Usage:")
    print("  python cli.py run <file.pile>")
    print("  python cli.py parse <file.pile>")
    print("  python cli.py tokens <file.pile>")
    print("  python cli.py repl")
    print("  python cli.py <file.pile>        (same as run)")
    print("  (optional) --debug to show Python traceback")
    print("  (optional) --trace to print every executed statement")
    print("  (optional) --max-steps N to stop after N statements")


def main():
    argv = sys.argv[1:]

    debug = False
    if "--debug" in argv:
        debug = True
        argv.remove("--debug")

    trace = False
    if "--trace" in argv:
        trace = True
        argv.remove("--trace")

    max_steps = None
    if "--max-steps" in argv:
        i = argv.index("--max-steps")
        try:
            max_steps = int(argv[i + 1])
        except (IndexError, ValueError):
            print("--max-steps expects a number")
            sys.exit(1)
        del argv[i:i + 2]

    if not argv:
        cmd_repl(debug=debug, trace=trace, max_steps=max_steps)
        return

    cmd = argv[0]

    if cmd in ("-h", "--help", "help"):
        usage()
        return

    if cmd == "repl":
        if len(argv) != 1:
            report_error(TooManyArgs())
            sys.exit(1)
        cmd_repl(debug=debug, trace=trace, max_steps=max_steps)
        return

    if cmd in ("run", "parse", "tokens"):
        if len(argv) < 2:
            usage()
            sys.exit(1)
        if len(argv) > 2:
            report_error(TooManyArgs())
            sys.exit(1)
        path = argv[1]
        if cmd == "run":
            cmd_run(path, debug=debug, trace=trace, max_steps=max_steps)
        elif cmd == "parse":
            cmd_parse(path, debug=debug)
        else:
            cmd_tokens(path, debug=debug)
        return

    # bare file path
    if len(argv) > 1:
        report_error(TooManyArgs())
        sys.exit(1)
    if not os.path.exists(cmd) and cmd.startswith("-"):
        print(f"Unknown option: {cmd}")
        usage()
        sys.exit(1)
    cmd_run(cmd, debug=debug, trace=trace, max_steps=max_steps)


if __name__ == "__main__":
    main()
