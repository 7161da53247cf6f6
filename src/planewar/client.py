"""Interactive CLI client for the plane battle game."""

from __future__ import annotations

import argparse
import logging
import os
import queue
import select
import sys
import threading
from typing import Any, Optional

from websockets.exceptions import WebSocketException

from . import config as _cfg
from .channel import WebSocketChannel
from .commands import (
    CommandParseError,
    CreateCommand,
    FireCommand,
    JoinCommand,
    MarkCommand,
    PlaceCommand,
    QuitCommand,
    ReadyCommand,
    RemoveCommand,
    RotateCommand,
    ShowCommand,
    Command,
    parse_command,
)
from .events import AttackResult, OpponentAttack, OpponentDisconnected, ServerEvent
from .coord_utils import format_coord
from .router import GameRouter
from .session import Session
from .view import grid_rows, status_line

logger = logging.getLogger(__name__)

# Sentinel pushed on the inbox when the receiver thread stops.
_EOF = object()

HELP = (
    "Commands: CREATE | JOIN <room> | ROTATE | PLACE <A1-J10> | REMOVE <coord> | "
    "READY | FIRE <coord> | MARK <coord> | SHOW | QUIT"
)


# ------------------------------------------------------------
# Dual-board renderer
# ------------------------------------------------------------


def _print_two_grids(
    left_rows: list[str],
    right_rows: list[str],
    *,
    header_left: str,
    header_right: str,
) -> None:
    """Helper to print two 10×10 boards side-by-side with custom headers."""

    if not left_rows or not right_rows:
        return

    columns = len(left_rows[0].split())
    numeric_header = "   " + " ".join(f"{i:>2}" for i in range(1, columns + 1))

    board_width = len(numeric_header)
    left_header = f"[{header_left}]".center(board_width)
    right_header = f"[{header_right}]".center(board_width)

    print(f"\n{left_header}   {right_header}")
    print(f"{numeric_header}   {numeric_header}")

    for idx in range(len(left_rows)):
        label = chr(ord("A") + idx)
        left = " ".join(f"{c:>2}" for c in left_rows[idx].split())
        right = " ".join(f"{c:>2}" for c in right_rows[idx].split())
        print(f"{label:2} {left}   {label:2} {right}")


def show(session: Session) -> None:
    if "grid" not in _cfg.QUIET_CATEGORIES:
        _print_two_grids(
            grid_rows(session, opponent=True),
            grid_rows(session),
            header_left="Opponent Sky",
            header_right="Your Sky",
        )
    print(status_line(session))


def _announce(event: ServerEvent, verbose: int) -> None:
    if verbose < 0 or "shot" in _cfg.QUIET_CATEGORIES:
        return
    if isinstance(event, AttackResult):
        result = "HEAD HIT" if event.is_head_hit else "HIT" if event.is_hit else "MISS"
        print(f"SHOT {format_coord(event.position)} ({result})")
    elif isinstance(event, OpponentAttack):
        result = "HEAD HIT" if event.is_head_hit else "HIT" if event.is_hit else "MISS"
        print(f"INCOMING {format_coord(event.position)} ({result})")
    elif isinstance(event, OpponentDisconnected):
        print("INFO Opponent disconnected – back to the lobby")


def _on_error(text: str) -> None:
    if "error" not in _cfg.QUIET_CATEGORIES:
        print(f"[ERROR] {text}")


# ------------------------------------------------------------
# Command dispatch
# ------------------------------------------------------------


def run_command(router: GameRouter, cmd: Command) -> bool:
    """Feed one parsed user command to *router*; True if it took effect."""
    if isinstance(cmd, CreateCommand):
        return router.create_room()
    if isinstance(cmd, JoinCommand):
        return router.join_room(cmd.room_id)
    if isinstance(cmd, RotateCommand):
        return router.rotate()
    if isinstance(cmd, PlaceCommand):
        return router.place(cmd.cell)
    if isinstance(cmd, RemoveCommand):
        return router.remove(cmd.cell)
    if isinstance(cmd, ReadyCommand):
        return router.ready()
    if isinstance(cmd, FireCommand):
        return router.attack(cmd.cell)
    if isinstance(cmd, MarkCommand):
        return router.mark(cmd.cell)
    return False


# ------------------------------------------------------------
# Receiver
# ------------------------------------------------------------


def _recv_loop(channel: WebSocketChannel, inbox: "queue.Queue[Any]", stop_evt: threading.Event) -> None:
    """Move decoded frames from the socket onto *inbox*, in delivery order.

    The session is never touched here; the main loop is the only consumer.
    """
    try:
        for obj in channel.frames():
            inbox.put(obj)
            if stop_evt.is_set():
                break
    except Exception as exc:  # noqa: BLE001
        logger.exception("Receiver thread crashed: %r", exc)
    finally:
        inbox.put(_EOF)


def drain(router: GameRouter, inbox: "queue.Queue[Any]", verbose: int = 0) -> bool:
    """Apply every queued frame; returns False once the channel has closed."""
    changed = False
    alive = True
    while True:
        try:
            obj = inbox.get_nowait()
        except queue.Empty:
            break
        if obj is _EOF:
            router.detach()
            alive = False
            break
        before = router.session
        event = router.handle_frame(obj)
        if event is not None:
            _announce(event, verbose)
        elif verbose >= 1 and "raw" not in _cfg.QUIET_CATEGORIES:
            print(obj)
        changed = changed or router.session != before
    if changed and verbose >= 0:
        show(router.session)
    return alive


# ----------------------------- main -------------------------------


def main(argv: Optional[list[str]] = None) -> None:  # pragma: no cover – CLI entry
    """Interactive CLI client."""

    parser = argparse.ArgumentParser(description="Plane battle CLI client")
    parser.add_argument("--url", default=_cfg.DEFAULT_URL)
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (stackable)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress most output",
    )
    args = parser.parse_args(argv)

    if args.debug:
        os.environ["PLANEWAR_DEBUG"] = "1"
    debug = args.debug or _cfg.DEBUG
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    verbose = -1 if args.quiet else args.verbose

    try:
        channel = WebSocketChannel.connect(args.url)
    except (OSError, TimeoutError, WebSocketException) as exc:
        logger.error("Could not connect to %s: %s", args.url, exc)
        return

    try:
        _client(channel, verbose)
    finally:
        channel.close()


def _client(channel: WebSocketChannel, verbose: int) -> None:  # pragma: no cover – interactive
    inbox: "queue.Queue[Any]" = queue.Queue()
    stop_evt = threading.Event()
    router = GameRouter(on_error=_on_error)
    router.attach(channel.send)

    receiver = threading.Thread(target=_recv_loop, args=(channel, inbox, stop_evt), daemon=True)
    receiver.start()

    print(HELP)
    print(status_line(router.session))
    try:
        while True:
            if not drain(router, inbox, verbose):
                logger.info("Disconnected from server. Exiting client.")
                break

            ready, _, _ = select.select([sys.stdin], [], [], 0.2)
            if not ready:
                continue
            user_input = sys.stdin.readline()
            if not user_input:
                break
            user_input = user_input.strip()
            if not user_input:
                continue
            try:
                cmd = parse_command(user_input)
            except CommandParseError as exc:
                print(f"[!] {exc}")
                continue
            if isinstance(cmd, QuitCommand):
                logger.info("Exiting client per user request.")
                break
            if isinstance(cmd, ShowCommand):
                show(router.session)
                continue
            if run_command(router, cmd):
                show(router.session)
            elif verbose >= 1:
                print("[!] Not possible right now")
    except KeyboardInterrupt:
        logger.info("Client exiting")
    finally:
        stop_evt.set()


if __name__ == "__main__":  # pragma: no cover
    main()
