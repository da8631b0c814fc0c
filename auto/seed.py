#!/usr/bin/env python3
"""
Seed Script.

Creates the tables, an admin user, a starter set of categories and tags
and, optionally, a few sample posts. Rows that already exist (same email,
category slug, tag slug or post slug) are left alone, so the script can be
run repeatedly.

Usage:
    python -m auto.seed
    python -m auto.seed --email admin@viblog.com --password Secret123 --with-posts

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@viblog.com)
    ADMIN_PASSWORD: Admin password (default: auto-generated)
    ADMIN_NICKNAME: Admin nickname (default: Admin)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from datetime import timedelta
from os import environ
from secrets import token_urlsafe
from sys import exit as sys_exit

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.configs import EXCERPT_LENGTH
from app.db.database import close_db, init_db, transaction
from app.managers.password_manager import hash_password
from app.models import CategoryDB, PostDB, PostStatus, TagDB, UserDB
from app.utils.helpers import utc_now
from app.utils.text import extract_excerpt, slugify

CATEGORIES = [
    ("Technology", "Technology and programming articles"),
    ("Lifestyle", "Lifestyle and personal development"),
    ("Travel", "Travel guides and experiences"),
]

TAGS = ["Python", "Web Development", "Tutorial", "Tips", "Review"]

SAMPLE_POSTS = [
    (
        "Getting Started with FastAPI",
        "# Getting Started with FastAPI\n\nFastAPI is a modern web framework for Python...",
        "Technology",
        ["Python", "Web Development", "Tutorial"],
    ),
    (
        "Ten Tips for Better Writing",
        "# Ten Tips for Better Writing\n\nWriting every day is the first step...",
        "Lifestyle",
        ["Tips"],
    ),
    (
        "A Week in Jeju",
        "# A Week in Jeju\n\nThe island is best explored by car...",
        "Travel",
        ["Review"],
    ),
]


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address.
    password : str
        Admin password (will be hashed).
    nickname : str
        Public display name.
    auto_generated : bool
        Whether the password was generated by this script.
    """

    email: str
    password: str
    nickname: str
    auto_generated: bool = False


def generate_secure_password(length: int = 16) -> str:
    """Generate a random password that satisfies the password policy."""
    password = token_urlsafe(length)
    return f"Admin{password[:12]}!1"


async def seed_admin(session: AsyncSession, data: AdminUserData) -> UserDB:
    result = await session.execute(select(UserDB).where(UserDB.email == data.email))
    if admin := result.scalar_one_or_none():
        print(f"• Admin user {data.email} already exists")
        return admin

    admin = UserDB(
        email=data.email,
        password=await hash_password(data.password),
        nickname=data.nickname,
        is_admin=True,
    )
    session.add(admin)
    await session.flush()

    print(f"✓ Created admin user (email: {data.email})")
    if data.auto_generated:
        print(f"  Password: {data.password}")
        print("  ⚠️  This password was auto-generated. Save it now!")
    return admin


async def seed_categories(session: AsyncSession) -> dict[str, CategoryDB]:
    categories: dict[str, CategoryDB] = {}
    created = 0
    for name, description in CATEGORIES:
        slug = slugify(name)
        result = await session.execute(select(CategoryDB).where(CategoryDB.slug == slug))
        category = result.scalar_one_or_none()
        if category is None:
            category = CategoryDB(name=name, slug=slug, description=description)
            session.add(category)
            created += 1
        categories[name] = category

    await session.flush()
    print(f"✓ Created {created} categories")
    return categories


async def seed_tags(session: AsyncSession) -> dict[str, TagDB]:
    tags: dict[str, TagDB] = {}
    created = 0
    for name in TAGS:
        slug = slugify(name)
        result = await session.execute(select(TagDB).where(TagDB.slug == slug))
        tag = result.scalar_one_or_none()
        if tag is None:
            tag = TagDB(name=name, slug=slug)
            session.add(tag)
            created += 1
        tags[name] = tag

    await session.flush()
    print(f"✓ Created {created} tags")
    return tags


async def seed_posts(
    session: AsyncSession,
    author: UserDB,
    categories: dict[str, CategoryDB],
    tags: dict[str, TagDB],
) -> None:
    created = 0
    now = utc_now()
    for offset, (title, content, category_name, tag_names) in enumerate(SAMPLE_POSTS):
        slug = slugify(title)
        result = await session.execute(select(PostDB.id).where(PostDB.slug == slug))
        if result.scalar_one_or_none() is not None:
            continue

        category = categories[category_name]
        post_tags = [tags[name] for name in tag_names]
        if author.id is None:
            msg = "Admin user was not persisted"
            raise ValueError(msg)

        session.add(
            PostDB(
                title=title,
                slug=slug,
                content=content,
                excerpt=extract_excerpt(content, EXCERPT_LENGTH),
                status=PostStatus.PUBLISHED,
                published_at=now - timedelta(days=offset),
                author_id=author.id,
                category_id=category.id,
                tags=post_tags,
            ),
        )
        category.post_count += 1
        for tag in post_tags:
            tag.post_count += 1
        created += 1

    await session.flush()
    print(f"✓ Created {created} sample posts")


async def seed(admin_data: AdminUserData, *, with_posts: bool) -> None:
    await init_db()
    try:
        async with transaction() as session:
            admin = await seed_admin(session, admin_data)
            categories = await seed_categories(session)
            tags = await seed_tags(session)
            if with_posts:
                await seed_posts(session, admin, categories, tags)
    finally:
        await close_db()


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description="Seed the Viblog database",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--email", help="Admin email address")
    parser.add_argument("--password", help="Admin password (auto-generated when omitted)")
    parser.add_argument("--nickname", help="Admin nickname")
    parser.add_argument("--with-posts", action="store_true", help="Also create sample posts")
    return parser.parse_args()


def admin_data_from_args(args: Namespace) -> AdminUserData:
    password = args.password or environ.get("ADMIN_PASSWORD")
    return AdminUserData(
        email=args.email or environ.get("ADMIN_EMAIL", "admin@viblog.com"),
        password=password or generate_secure_password(),
        nickname=args.nickname or environ.get("ADMIN_NICKNAME", "Admin"),
        auto_generated=password is None,
    )


def main() -> int:
    args = parse_args()
    print("=" * 60)
    print("Creating seed data...")
    print("=" * 60)
    try:
        asyncio_run(seed(admin_data_from_args(args), with_posts=args.with_posts))
    except KeyboardInterrupt:
        print("\n❌ Cancelled")
        return 1

    print("\n✅ Seed completed")
    return 0


if __name__ == "__main__":
    sys_exit(main())
