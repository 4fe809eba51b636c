"""
Script to create a user and print an access token
Identity is owned by another service; this is for local development
"""

import sys
import asyncio
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubhub.database import database, connect_db, disconnect_db
from clubhub.auth import create_access_token


async def create_user(email: str, name: str):
    """
    Create a user (or reuse an existing one) and print a bearer token
    
    Args:
        email: User email
        name: Display name
    """
    
    await connect_db()
    
    try:
        user = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email AND deleted_at IS NULL",
            {"email": email}
        )
        
        if user:
            print(f"User with email {email} already exists (id {user['id']})")
        else:
            await database.execute(
                "INSERT INTO users (email, name) VALUES (:email, :name)",
                {"email": email, "name": name}
            )
            user = await database.fetch_one(
                "SELECT id FROM users WHERE email = :email",
                {"email": email}
            )
            print(f"User created (id {user['id']})")
        
        token = create_access_token({"sub": str(user["id"])})
        print(f"   Token: {token}")
    
    finally:
        await disconnect_db()


async def main():
    """Main function"""
    print("\n" + "="*60)
    print("CREATE USER")
    print("="*60 + "\n")
    
    email = input("Enter email: ").strip()
    name = input("Enter name: ").strip()
    
    print("\n")
    await create_user(email, name)
    print("\n")


if __name__ == "__main__":
    asyncio.run(main())
