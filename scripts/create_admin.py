# scripts/create_admin.py
#  to run the script, run the following command:
#  python scripts/create_admin.py --name "Clinic Admin" --email admin@example.com --password <password>

"""
Admin Bootstrap Script
Admins cannot self-register over the API; this creates one directly in the database.
"""
import sys
import asyncio
import argparse
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from app.database.connection import AsyncSessionLocal, init_models
from app.users.security import get_password_hash
from app.users.user_models.user_model import User
# Registers the patient, doctor and appointment tables before create_all
import app.system_services.records  # noqa: F401

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def create_admin(name: str, email: str, password: str) -> bool:
    await init_models()
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        if result.scalars().first():
            logger.error(f"❌ A user with email {email} already exists")
            return False

        admin = User(
            name=name,
            email=email.strip().lower(),
            hashed_password=get_password_hash(password),
            role="admin",
        )
        db.add(admin)
        await db.commit()
        logger.info(f"✅ Admin created: id={admin.id} email={admin.email}")
        return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    ok = asyncio.run(create_admin(args.name, args.email, args.password))
    sys.exit(0 if ok else 1)
