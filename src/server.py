"""Protean Engine runner for the storefront domain.

Only needed when PROTEAN_ENV selects async event processing (production):
the engine picks up raised events and runs the event handlers, such as the
password reset mailer, outside the request.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from storefront.domain import storefront

    storefront.init()
    await Engine(storefront).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
