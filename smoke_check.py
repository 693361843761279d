# smoke_check.py - exercise the landing endpoints on a running server
import httpx
from datetime import datetime
import asyncio

BASE_URL = "http://localhost:8000"

TEST_EMAIL = f"smoke_{int(datetime.now().timestamp())}@example.com"

async def check_health():
    """Test health endpoint"""
    async with httpx.AsyncClient() as client:
        response = await client.get(f"{BASE_URL}/health")
        print("✅ Health Check:", response.json())
        return response.status_code == 200

async def check_contact():
    """Submit the popup contact form twice with the same email"""
    async with httpx.AsyncClient() as client:
        contact_ids = []
        for company in ("Acme", "Acme Learning"):
            response = await client.post(
                f"{BASE_URL}/api/contact",
                json={
                    "name": "Smoke Test",
                    "email": TEST_EMAIL,
                    "company": company,
                    "ctaType": "hero_cta",
                    "timestamp": int(datetime.now().timestamp() * 1000)
                },
                headers={"referer": f"{BASE_URL}/"}
            )
            if response.status_code != 200:
                print(f"❌ Contact failed: {response.text}")
                return False
            contact_ids.append(response.json().get("contactId"))

        if contact_ids[0] != contact_ids[1]:
            print(f"❌ Duplicate contact rows: {contact_ids}")
            return False

        print(f"✅ Contact saved: {contact_ids[0]}")
        return True

async def check_subscribe():
    """Subscribe the same email"""
    async with httpx.AsyncClient() as client:
        response = await client.post(f"{BASE_URL}/api/subscribe", json={"email": TEST_EMAIL})
        if response.status_code == 200:
            print("✅ Subscription successful!")
            return True
        print(f"❌ Subscription failed: {response.text}")
        return False

async def check_track_click():
    """Track a click attributed to the contact"""
    async with httpx.AsyncClient(cookies={"session_id": "session_smoke"}) as client:
        response = await client.post(
            f"{BASE_URL}/api/track-click",
            json={"buttonType": "pricing_cta", "email": TEST_EMAIL}
        )
        if response.status_code == 200:
            print("✅ Click tracked!")
            return True
        print(f"❌ Track click failed: {response.text}")
        return False

async def check_validation():
    """Invalid submissions are rejected with 400"""
    async with httpx.AsyncClient() as client:
        response = await client.post(f"{BASE_URL}/api/subscribe", json={"email": "not-an-email"})
        if response.status_code == 400 and not response.json()["success"]:
            print("✅ Invalid email rejected")
            return True
        print(f"❌ Invalid email accepted: {response.status_code} {response.text}")
        return False

async def run_all_checks():
    """Run all landing endpoint checks"""
    print("\n" + "="*50)
    print("🚀 Starting Landing API Smoke Tests")
    print("="*50 + "\n")

    if not await check_health():
        print("❌ Server is not running! Start it with: uvicorn app.main:app --reload")
        return

    results = [
        await check_contact(),
        await check_subscribe(),
        await check_track_click(),
        await check_validation(),
    ]

    print("\n" + "="*50)
    print("✅ All checks passed!" if all(results) else "❌ Some checks failed")
    print("="*50 + "\n")

if __name__ == "__main__":
    asyncio.run(run_all_checks())
