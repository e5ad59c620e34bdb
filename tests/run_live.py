"""Live integration test — Python SDK against a real Walter endpoint."""

import asyncio
import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from walter_ai import AsyncWalter, CancelToken, RequestCancelled, WalterError

TOKEN = os.environ.get("WALTER_TOKEN", "")
BASE_URL = os.environ.get("WALTER_URL", "https://walterops.com")

passed = 0
failed = 0

def check(condition, msg):
    global passed, failed
    if condition:
        print(f"  PASS: {msg}")
        passed += 1
    else:
        print(f"  FAIL: {msg}")
        failed += 1


async def main():
    client = AsyncWalter(TOKEN, BASE_URL)

    print("\n=== Handshake ===")
    turfs = await client.list_turfs()
    check(client.session.session_id, f"Session opened: {client.session.session_id}")
    check(isinstance(turfs, list), f"Turfs listed: {len(turfs)}")
    for t in turfs:
        print(f"    - {t.label} ({t.type}, {t.status})")

    print("\n=== Chats ===")
    chat_id = await client.start_chat()
    check(chat_id, f"Chat started: {chat_id}")
    chats = await client.list_chats()
    check(chat_id in [c.id for c in chats], f"List chats: {len(chats)} total")

    print("\n=== Streaming chat ===")
    partials = []
    result = await client.stream(chat_id, "How much free disk space does each system have?", partials.append)
    check(result.response, f"Final answer ({len(result.response)} chars)")
    check(len(partials) == len(set(partials)), f"No duplicate partials ({len(partials)} seen)")
    print(f"\n  Walter: \"{result.response[:200]}\"\n")

    print("\n=== Cancellation ===")
    token = CancelToken()
    asyncio.get_running_loop().call_later(3, token.cancel)
    try:
        await client.stream(chat_id, "Audit every nginx config you can find.", cancel_token=token)
        check(False, "Should have been cancelled")
    except RequestCancelled:
        check(True, "Local cancellation stops polling")
    outcome = await client.cancel(chat_id)
    check(outcome.status, f"Remote cancel: {outcome.status}")

    print("\n=== Search ===")
    found = await client.search_turfs(status="online")
    check(found.count == len(found.turfs), f"Search online: {found.count}")

    print("\n=== Error ===")
    try:
        await client.get_response("req_does_not_exist")
        check(False, "Should have thrown")
    except WalterError as e:
        check(True, f"Unknown request throws: {str(e)[:80]}")

    await client.aclose()

    print(f"\n{'='*50}")
    print(f"Results: {passed} passed, {failed} failed out of {passed + failed}")
    print("=" * 50)
    sys.exit(1 if failed > 0 else 0)


asyncio.run(main())
