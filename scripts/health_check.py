#!/usr/bin/env python3
"""Validate Planka MCP configuration and test connectivity."""

import asyncio
import sys

from dotenv import load_dotenv

from planka_mcp.lifespan import create_client
from planka_mcp.settings import PlankaSettings


async def main() -> int:
    load_dotenv()
    print("Loading settings...")
    try:
        settings = PlankaSettings()
    except Exception as e:
        print(f"FAIL: Could not load settings: {e}")
        return 1

    print(f"  PLANKA_BASE_URL: {settings.base_url}")
    print(f"  PLANKA_AGENT_EMAIL: {settings.agent_email or '(not set)'}")
    print(f"  PLANKA_AGENT_PASSWORD: {'********' if settings.agent_password else '(not set)'}")
    if settings.allow_insecure:
        print("  PLANKA_ALLOW_INSECURE: certificate verification disabled")

    print("\nTesting connectivity...")
    client = create_client(settings)

    try:
        await client.login()
        print("  OK: Authenticated")
        projects = await client.get_projects(page=1, per_page=5)
        print(f"  OK: Found {len(projects)} accessible projects")
        for p in projects[:5]:
            print(f"    - {p.get('id')}: {p.get('name')}")
        return 0
    except Exception as e:
        print(f"  FAIL: {e}")
        return 1
    finally:
        await client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
