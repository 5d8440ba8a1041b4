"""
chatsync: console client entry point.

Connects one Session to the chat server and drives it from stdin.  Incoming
events only update local state; use /rooms, /users and /history to look at it.
"""

import asyncio
import logging
import sys
import threading

from websockets.exceptions import InvalidHandshake, InvalidURI

from chatsync.config import settings
from chatsync.websocket.session import ConnectionLost, Session

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

HELP = """
Commands:
  /join <room>            join (or create) a public room
  /private <id>           open a private room with a user
  /leave <room>           leave a room
  /say <room-id> <text>   send a message to a joined room (ids are shown by /rooms)
  /rooms                  list joined rooms
  /users                  list online users
  /history <room>         show messages received in a room
  /quit
  /help
"""


async def handle_line(session: Session, line: str) -> bool:
    """Run one console command.  Returns False once the user asks to quit."""
    line = line.strip()
    if not line:
        return True
    if not line.startswith("/"):
        print("Prefix commands with /. Type /help")
        return True

    cmd, _, rest = line.partition(" ")
    cmd = cmd.lower()
    # Room names may contain spaces: everything after the command is the name.
    arg = rest.strip()

    try:
        if cmd == "/quit":
            return False
        elif cmd == "/help":
            print(HELP)
        elif cmd == "/join":
            await session.join_room(arg)
        elif cmd == "/private":
            await session.join_private_room(arg)
        elif cmd == "/leave":
            room = session.rooms.find_by_name(arg)
            if room is None:
                print(f"Not in room {arg!r}")
            else:
                await session.leave_room(room)
        elif cmd == "/say":
            room_id, _, text = arg.partition(" ")
            room = session.rooms.find_by_id(room_id)
            if room is None:
                print(f"Not in room {room_id!r}")
            elif not text.strip():
                print("Nothing to send")
            else:
                room.draft = text
                await session.send_message(room)
        elif cmd == "/rooms":
            names = [f"{r.name} [{r.id}]" + (" (private)" if r.private else "") for r in session.rooms]
            print("Rooms:", ", ".join(names) if names else "(none)")
        elif cmd == "/users":
            names = sorted(u.name for u in session.users.list())
            print("Users:", ", ".join(names) if names else "(none)")
        elif cmd == "/history":
            room = session.rooms.find_by_name(arg)
            if room is None:
                print(f"Not in room {arg!r}")
            else:
                for message in room.messages:
                    print(f"<{message.sender.name}> {message.text}")
        else:
            print("Unknown/invalid command. Type /help")
    except ValueError as exc:
        print(f"Invalid command: {exc}")
    return True


def _read_stdin(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue) -> None:
    """Feed stdin lines into *lines*; an empty string marks EOF."""
    try:
        for line in iter(sys.stdin.readline, ""):
            loop.call_soon_threadsafe(lines.put_nowait, line)
        loop.call_soon_threadsafe(lines.put_nowait, "")
    except RuntimeError:
        # Event loop already closed on exit.
        pass


async def console_loop(session: Session, lines: asyncio.Queue) -> None:
    """Run commands from *lines* until quit, EOF or the connection going away."""
    receiver = asyncio.create_task(session.run())
    try:
        while True:
            next_line = asyncio.ensure_future(lines.get())
            done, _ = await asyncio.wait({next_line, receiver}, return_when=asyncio.FIRST_COMPLETED)
            if next_line not in done:
                next_line.cancel()
                break
            line = next_line.result()
            if not line or not await handle_line(session, line):
                break
    except ConnectionLost as exc:
        logger.warning("Stopped: %s", exc)
    finally:
        receiver.cancel()
        try:
            await receiver
        except asyncio.CancelledError:
            pass
        except Exception as exc:
            logger.error("Receiver stopped with an error: %s", exc, exc_info=True)
    if session.closed:
        print("Disconnected.")


async def run_console(display_name: str, server_url: str | None = None) -> None:
    lines: asyncio.Queue = asyncio.Queue()
    threading.Thread(target=_read_stdin, args=(asyncio.get_running_loop(), lines), daemon=True).start()
    async with Session(display_name, server_url) as session:
        print(HELP)
        await console_loop(session, lines)


def run() -> None:
    display_name = settings.DISPLAY_NAME or input("Display name: ").strip()
    try:
        asyncio.run(run_console(display_name))
    except KeyboardInterrupt:
        pass
    except (OSError, InvalidHandshake, InvalidURI) as exc:
        logger.error("Could not connect to %s: %s", settings.SERVER_URL, exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
