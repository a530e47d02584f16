"""
Minesweeper Bot - Interactive Demo

Run with: streamlit run app/demo.py
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Dict, List, Optional, Sequence, Tuple

from minesweeper_bot import (
    Minesweeper,
    MinesweeperSolver,
    Mode,
    Move,
    SolverConfig,
)

CLUE_COLORS: Dict[str, str] = {
    "1": "#0000ff",
    "2": "#008000",
    "3": "#ff0000",
    "4": "#000080",
    "5": "#800000",
    "6": "#008080",
    "7": "#000000",
    "8": "#808080",
}

METHOD_LABELS = {
    "first_move": "First Move",
    "deduction": "Deduction",
    "fallback": "Random Fallback",
}


def cell_size_for(cols: int) -> Tuple[int, str]:
    """Scale cell size based on board width."""
    if cols >= 30:
        return 14, "10px"
    if cols >= 25:
        return 16, "11px"
    if cols >= 16:
        return 20, "13px"
    return 26, "15px"


def render_board(
    snapshot: Sequence[str],
    highlight: Sequence[Tuple[int, int]] = (),
    mines: Optional[set] = None,
    hit_mine: Optional[Tuple[int, int]] = None,
) -> str:
    """Render a board snapshot ('.', 'F', '0'-'8' rows) as an HTML table."""
    cols = len(snapshot[0])
    cell_size, font_size = cell_size_for(cols)
    highlighted = set(highlight)

    html = '<div style="font-family: monospace; line-height: 1.2;">'
    html += '<table style="border-collapse: collapse; margin: auto;">'

    for r, line in enumerate(snapshot, start=1):
        html += "<tr>"
        for c, ch in enumerate(line, start=1):
            if (r, c) == hit_mine:
                display, bg, text_color = "M", "#ff0000", "#ffffff"
            elif ch == "F":
                display, bg, text_color = "F", "#ffa500", "#ffffff"
            elif ch == "." and mines and (r, c) in mines:
                display, bg, text_color = "M", "#ffcccc", "#ff0000"
            elif ch == ".":
                display, bg, text_color = ".", "#c0c0c0", "#666666"
            else:
                display = ch if ch != "0" else " "
                bg = "#f0f0f0" if ch == "0" else "#ffffff"
                text_color = CLUE_COLORS.get(ch, "#000000")

            border = "2px solid #ff0000" if (r, c) in highlighted else "1px solid #999"
            html += f'''<td style="
                width: {cell_size}px; height: {cell_size}px;
                text-align: center;
                background: {bg};
                border: {border};
                color: {text_color};
                font-weight: bold;
                font-size: {font_size};
            ">{display}</td>'''
        html += "</tr>"

    html += "</table></div>"
    return html


def describe_moves(moves: List[Move]) -> str:
    parts = [f"{m.action.value} ({m.target[0]}, {m.target[1]})" for m in moves[:6]]
    if len(moves) > 6:
        parts.append(f"... {len(moves) - 6} more")
    return ", ".join(parts) if parts else "no move applied"


def new_game(rows: int, cols: int, mines: int, algorithm: str, seed: int) -> None:
    # Solve seeds the solver with board_seed as well.
    st.session_state.game = Minesweeper(
        rows, cols, mines, algorithm, rng=random.Random(seed)
    )
    st.session_state.board_seed = seed
    st.session_state.payload = None
    st.session_state.current_step = 0


def main():
    st.set_page_config(
        page_title="Minesweeper Bot",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper Bot")
    st.markdown("""
    A bot that plays Minesweeper with two single-cell rules and a random fallback.
    """)

    # Sidebar configuration
    st.sidebar.header("Game Configuration")

    preset = st.sidebar.selectbox(
        "Difficulty Preset",
        ["Expert (16x30, 99)", "Intermediate (16x16, 40)", "Beginner (9x9, 10)", "Custom"],
    )

    if preset == "Beginner (9x9, 10)":
        rows, cols, mines = 9, 9, 10
    elif preset == "Intermediate (16x16, 40)":
        rows, cols, mines = 16, 16, 40
    elif preset == "Expert (16x30, 99)":
        rows, cols, mines = 16, 30, 99
    else:
        cols = st.sidebar.slider("Columns", 5, 30, 16)
        rows = st.sidebar.slider("Rows", 5, 30, 16)
        max_mines = rows * cols - 9
        mines = st.sidebar.slider("Mines", 1, max_mines, min(40, max_mines))

    algorithm = st.sidebar.selectbox(
        "Mine Generation",
        ["safe_neighborhood_rule", "safe_first_action_rule"],
        help="safe_neighborhood_rule: First click + neighbors are safe. "
             "safe_first_action_rule: Only first click is safe.",
    )
    seed = int(st.sidebar.number_input("Seed", min_value=0, value=0, step=1))

    if "game" not in st.session_state:
        st.session_state.game = None
        st.session_state.payload = None
        st.session_state.current_step = 0
        st.session_state.prev_settings = None
        st.session_state.seed_offset = 0

    current_settings = (rows, cols, mines, algorithm, seed)
    if st.session_state.prev_settings != current_settings:
        st.session_state.seed_offset = 0
        st.session_state.prev_settings = current_settings
        new_game(rows, cols, mines, algorithm, seed)

    board_col, stats_col = st.columns([3, 1])

    with board_col:
        st.subheader("Game Board")
        btn_col1, btn_col2 = st.columns(2)

        with btn_col1:
            if st.button("Regenerate Board", type="primary", key="regenerate"):
                st.session_state.seed_offset += 1
                new_game(rows, cols, mines, algorithm, seed + st.session_state.seed_offset)
                st.rerun()

        with btn_col2:
            if st.button("Solve", key="solve"):
                game = st.session_state.game
                if st.session_state.payload is not None:
                    game.reset()
                config = SolverConfig(
                    rows=rows,
                    cols=cols,
                    mode=Mode.FAST,
                    start_delay_ms=0,
                    seed=st.session_state.board_seed,
                    record_steps=True,
                )
                _, payload = MinesweeperSolver(game, config).solve()
                st.session_state.payload = payload
                st.session_state.current_step = len(payload["steps_history"]) - 1
                st.rerun()

        game = st.session_state.game
        payload = st.session_state.payload
        steps = payload["steps_history"] if payload else []

        if steps:
            total = len(steps)
            step_display = st.slider("Tick", 1, total, st.session_state.current_step + 1)
            st.session_state.current_step = step_display - 1
            step = steps[st.session_state.current_step]
            is_final = st.session_state.current_step == total - 1

            st.info(
                f"**Tick {step_display}/{total}** ({METHOD_LABELS[step['method']]}): "
                f"{describe_moves(step['moves'])}"
            )
            html = render_board(
                step["board_snapshot"],
                highlight=[m.target for m in step["moves"]],
                mines=game.all_mines() if is_final else None,
                hit_mine=game.hit_mine if is_final else None,
            )
            st.markdown(html, unsafe_allow_html=True)

            if is_final:
                status = payload["status"].value
                if status == "WON":
                    st.success("Solved! All safe cells revealed.")
                elif status == "LOST":
                    st.error("Game Over! Hit a mine.")
                else:
                    st.warning("Stopped with nothing left to reveal.")
        else:
            st.markdown(render_board(["." * cols] * rows), unsafe_allow_html=True)
            st.info("Click 'Solve' to let the bot play this board.")

    with stats_col:
        st.subheader("Solver Statistics")
        if payload:
            metrics: List[Tuple[str, object]] = [
                ("Result", payload["status"].value.title()),
                ("Ticks", payload["ticks_count"]),
                ("Flags", payload["flags_count"]),
                ("Deduced Reveals", payload["deduced_reveals_count"]),
                ("Random Guesses", payload["guesses_count"]),
            ]
            for label, value in metrics:
                st.metric(label, value)
        else:
            st.info("Run the solver to see statistics.")

        st.markdown("---")
        st.subheader("Algorithm Info")
        st.markdown("""
        **Rules, per numbered cell:**
        1. **Flag**: clue == closed neighbors, flag all hidden ones
        2. **Reveal**: clue == flagged neighbors, reveal all hidden ones
        3. **Fallback**: nothing deduced, reveal a random hidden cell
        """)


if __name__ == "__main__":
    main()
