#!/usr/bin/env python3
"""
Demo script for fsmlayout.

Lays out a few machines, prints where their states end up and writes PNG
previews next to the script.
"""

from fsmlayout import DiagramGenerator, StateMachine, render_to_png


def print_header(title):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def show(result):
    for state, position in result.positions.items():
        print(f"  state {state}: {position}")
    print(f"  crossings: {result.crossings}")
    if result.fallbacks:
        print(f"  placed without a clean candidate: {result.fallbacks}")


def demo_1():
    """Demo 1: Mutual edges and self-loops"""
    print_header("Demo 1: Two States")

    input_text = """
    alphabet: 0 1
    accept: 1
    0 -0-> 1
    0 -1-> 0
    1 -0-> 0
    1 -1-> 1
    """
    print("Input:")
    print("------")
    print(input_text)

    generator = DiagramGenerator()
    result = generator.generate(input_text)
    show(result)

    print("\nEdge offsets:")
    for state, row in enumerate(result.offsets):
        for symbol, offset in row.items():
            print(f"  {state} -{symbol}-> : {offset}")

    render_to_png(generator.machine, result, "demo_two_states.png")


def demo_2():
    """Demo 2: Binary strings ending in 01"""
    print_header("Demo 2: Strings Ending in 01")

    input_text = """
    alphabet: 0 1
    accept: 2
    0 -0-> 1
    0 -1-> 0
    1 -0-> 1
    1 -1-> 2
    2 -0-> 1
    2 -1-> 0
    """
    generator = DiagramGenerator()
    result = generator.generate(input_text, debug=True)
    show(result)

    for word in ("01", "1101", "110"):
        verdict = "accepted" if generator.machine.accepts(word) else "rejected"
        print(f"  {word!r}: {verdict}")

    print()
    print(generator.get_trace().summary())
    render_to_png(generator.machine, result, "demo_ends_in_01.png")


def demo_3():
    """Demo 3: Random sixteen-state machine"""
    print_header("Demo 3: Random Machine")

    machine = StateMachine.random(16, seed=2024)
    generator = DiagramGenerator()
    result = generator.generate(machine)
    show(result)

    # Drag one state and one edge the way an editor would
    generator.set_state_position(0, 400, 300)
    generator.set_control_position(0, "0", 420, 260)
    render_to_png(machine, generator.snapshot(), "demo_random.png")


def main():
    """Run all demos."""
    demo_1()
    demo_2()
    demo_3()
    print("\nWrote demo_two_states.png, demo_ends_in_01.png and demo_random.png")


if __name__ == "__main__":
    main()
