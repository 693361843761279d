import asyncio
import asyncpg
import os
from dotenv import load_dotenv

load_dotenv('.env.production')

LANDING_TABLES = ("contacts", "button_clicks", "email_subscriptions", "conversion_events")

async def check():
    try:
        url = os.getenv('DATABASE_URL')
        if not url:
            print("❌ DATABASE_URL is not set")
            return False

        conn = await asyncio.wait_for(
            asyncpg.connect(url, command_timeout=10),
            timeout=15
        )

        try:
            version = await conn.fetchval('SELECT version()')
            existing = await conn.fetch(
                "SELECT table_name FROM information_schema.tables WHERE table_schema = 'public' AND table_name = ANY($1::text[])",
                list(LANDING_TABLES)
            )
        finally:
            await conn.close()

        print(f"✅ Connection successful!")
        print(f"PostgreSQL: {version.split(',')[0]}")

        found = {row['table_name'] for row in existing}
        for table in LANDING_TABLES:
            print(f"{'✓' if table in found else '✗'} {table}")

        missing = [table for table in LANDING_TABLES if table not in found]
        if missing:
            print("Fix: run python create_schema.py")
        return not missing

    except asyncio.TimeoutError:
        print(f"❌ Connection timeout - check network access to the database")
        return False

    except Exception as e:
        print(f"❌ Connection failed: {str(e)}")
        print(f"Error type: {type(e).__name__}")
        return False

if __name__ == "__main__":
    success = asyncio.run(check())
    exit(0 if success else 1)
