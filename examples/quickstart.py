"""Quickstart Example - Building Grammars from Combinators.

Demonstrates the main pieces of combiparse:

1. Primitive matchers and the Success/Failure result model
2. Sequencing, repetition, and alternation
3. Recursive grammars with Rule
4. Token streams instead of text
5. Error reporting with parse_all

Python 3.13+.
"""

from __future__ import annotations


def example_1_primitives() -> None:
    """Match a prefix and inspect the result."""
    from combiparse import Cursor, Failure, Success, match_prefix

    print("=" * 60)
    print("Example 1: Primitives")
    print("=" * 60)

    for source in ("abc", "xyz"):
        match match_prefix("ab")(Cursor(source)):
            case Success(value, remainder):
                print(f"{source!r}: matched {value!r}, left {remainder.remaining()!r}")
            case Failure(error):
                print(f"{source!r}: {error.format_error()}")
    print()


def example_2_combinators() -> None:
    """Parse a comma-separated list of integers."""
    from combiparse import compose, map_value, match_range, parse_all, rep, rep1

    print("=" * 60)
    print("Example 2: Combinators")
    print("=" * 60)

    integer = map_value(rep1(match_range("0", "9")), lambda ds: int("".join(ds)))
    tail = map_value(compose(",", integer), lambda pair: pair[1])
    numbers = map_value(compose(integer, rep(tail)), lambda pair: [pair[0], *pair[1]])

    print(parse_all(numbers, "1,22,333"))
    print()


def example_3_recursion() -> None:
    """Evaluate nested arithmetic with a recursive Rule."""
    from combiparse import Rule, compose, map_value, match_range, or_, parse_all, rep, rep1

    print("=" * 60)
    print("Example 3: Recursive Grammar")
    print("=" * 60)

    expr = Rule("expr")
    number = map_value(rep1(match_range("0", "9")), lambda ds: int("".join(ds)))
    group = map_value(compose("(", compose(expr, ")")), lambda p: p[1][0])
    atom = or_(number, group)
    expr.define(
        map_value(
            compose(atom, rep(map_value(compose("+", atom), lambda p: p[1]))),
            lambda p: p[0] + sum(p[1]),
        )
    )

    for source in ("1+2", "(1+2)+(3+(4))"):
        print(f"{source} = {parse_all(expr, source)}")
    print()


def example_4_tokens() -> None:
    """Parse a token list produced by some external lexer."""
    from combiparse import compose, match_if, parse_all

    print("=" * 60)
    print("Example 4: Token Streams")
    print("=" * 60)

    tokens = ["let", "x", "=", 42]
    name = match_if(str.isidentifier)
    binding = compose(["let"], compose(name, compose(["="], match_if(lambda t: isinstance(t, int)))))

    _, (ident, (_, value)) = parse_all(binding, tokens)
    print(f"{ident} -> {value}")
    print()


def example_5_errors() -> None:
    """Show how failures are reported."""
    from combiparse import ParseFailedError, match_range, parse_all, rep1

    print("=" * 60)
    print("Example 5: Error Reporting")
    print("=" * 60)

    try:
        parse_all(rep1(match_range("0", "9")), "123\n45x")
    except ParseFailedError as e:
        print(e.error.format_with_context())
    print()


def main() -> None:
    """Run all examples."""
    example_1_primitives()
    example_2_combinators()
    example_3_recursion()
    example_4_tokens()
    example_5_errors()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
