"""Minimal demonstration of a chat session against the configured worker."""

import asyncio

from portfolio_chat import create_session


async def main():
    session = create_session()
    session.widget.toggle()
    session.widget.set_input("What projects has he worked on?")
    task = session.widget.submit()
    if task is not None:
        await task
    for kind, content in session.widget.messages():
        print(f"{kind}: {content}")


if __name__ == "__main__":
    asyncio.run(main())
