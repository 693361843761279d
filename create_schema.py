import asyncio
import asyncpg
import os
from dotenv import load_dotenv

load_dotenv('.env.production')

async def create_schema():
    conn = await asyncpg.connect(os.getenv('DATABASE_URL'))

    # Create extension for UUID
    await conn.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    tables_sql = '''
        -- Contacts, one row per email
        CREATE TABLE IF NOT EXISTS contacts (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            name VARCHAR(255) NOT NULL,
            email VARCHAR(255) UNIQUE NOT NULL,
            company VARCHAR(255),
            source VARCHAR(50),
            user_agent TEXT,
            ip_address VARCHAR(64),
            utm_source VARCHAR(100),
            utm_medium VARCHAR(100),
            utm_campaign VARCHAR(100),
            created_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP
        );

        -- Button clicks (append-only)
        CREATE TABLE IF NOT EXISTS button_clicks (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            contact_id UUID REFERENCES contacts(id) ON DELETE SET NULL,
            button_type VARCHAR(100) NOT NULL,
            page_url TEXT,
            session_id VARCHAR(100),
            user_agent TEXT,
            ip_address VARCHAR(64),
            referrer TEXT,
            clicked_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP
        );

        -- Email subscriptions, one row per email
        CREATE TABLE IF NOT EXISTS email_subscriptions (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            contact_id UUID REFERENCES contacts(id) ON DELETE SET NULL,
            email VARCHAR(255) UNIQUE NOT NULL,
            subscribed BOOLEAN NOT NULL DEFAULT true,
            subscription_type VARCHAR(50) NOT NULL DEFAULT 'newsletter',
            subscribed_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP,
            unsubscribed_at TIMESTAMPTZ
        );

        -- Conversion events (append-only)
        CREATE TABLE IF NOT EXISTS conversion_events (
            id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
            contact_id UUID REFERENCES contacts(id) ON DELETE SET NULL,
            event_type VARCHAR(100) NOT NULL,
            event_data JSONB,
            created_at TIMESTAMPTZ DEFAULT CURRENT_TIMESTAMP
        );

        -- Essential indexes
        CREATE INDEX IF NOT EXISTS idx_contacts_source ON contacts(source);
        CREATE INDEX IF NOT EXISTS idx_button_clicks_contact ON button_clicks(contact_id);
        CREATE INDEX IF NOT EXISTS idx_button_clicks_type ON button_clicks(button_type);
        CREATE INDEX IF NOT EXISTS idx_button_clicks_session ON button_clicks(session_id);
        CREATE INDEX IF NOT EXISTS idx_conversion_events_contact ON conversion_events(contact_id);
        CREATE INDEX IF NOT EXISTS idx_conversion_events_type ON conversion_events(event_type);
    '''

    try:
        await conn.execute(tables_sql)
        print("Created all database tables")
        return True
    except Exception as e:
        print(f"❌ Error: {e}")
        return False
    finally:
        await conn.close()

if __name__ == "__main__":
    success = asyncio.run(create_schema())
    print("✅ Schema creation completed!" if success else "❌ Schema creation failed!")
