from civsim.commands import HELP_LINES, apply_command
from civsim.render_ascii import render_map_ascii


def run_repl(game, input_fn=input, output_fn=print):
    output_fn("Hex Civ Simulator")
    output_fn("Type 'help' for commands. Type 'exit' to quit.\n")

    while True:
        nation = game.current_nation
        prompt = f"[Turn {game.turn_number} | {nation.name}]> "
        try:
            raw = input_fn(prompt).strip()
        except EOFError:
            break
        cmd = raw.lower()

        if cmd in ("quit", "exit"):
            break

        elif cmd == "help":
            for line in HELP_LINES:
                output_fn(line)
            output_fn("  map                           - show ascii map")
            output_fn("  log                           - show recent game log")

        elif cmd == "map":
            output_fn(render_map_ascii(game, nation))

        elif cmd == "log":
            show_log(game, output_fn)

        elif raw:
            for line in apply_command(game, nation.name, raw):
                output_fn(line)

        if game.is_game_over():
            output_fn("Game over.")
            break


def show_log(game, output_fn=print, n: int = 20):
    if not game.log:
        output_fn("(no events)")
        return
    for line in game.log[-n:]:
        output_fn(f"  {line}")
