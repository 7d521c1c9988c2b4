"""Seed the database with a demo owner and sample Sri Lankan listings.

Every listing goes through ``ListingSubmitter``, exactly like a wizard
submit, so the seeded rows obey the same rules as real ones.

Run from the project root:
    python -m scripts.seed_data
"""

import asyncio
from decimal import Decimal

from sqlalchemy import delete, select

from staylist.auth.passwords import hash_password
from staylist.database import Base, async_session_factory, engine
from staylist.listing.form import PropertyDraft, RoomDraft
from staylist.listing.sequencer import ListingSubmitter
from staylist.models.property import Property
from staylist.models.user import User
from staylist.persistence.repository import ListingRepository

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_USER = {
    "email": "demo@staylist.lk",
    "password": "demo1234",
    "name": "Demo Owner",
    "phone_number": "+94 77 123 4567",
}

_CLOUDINARY_DEMO = "https://res.cloudinary.com/demo/image/upload"


def _listings() -> list[PropertyDraft]:
    return [
        PropertyDraft(
            property_type="Hotel",
            name="Seaside Inn",
            description="Family-run inn a short walk from Galle Fort and the lighthouse.",
            street_address="12 Lighthouse Street",
            city="Galle",
            state="Southern Province",
            amenities={
                "Front Desk & Guest Services": {"24-hour front desk", "Baggage storage", "Tour desk"},
                "Dining & Refreshments": {"Restaurant", "Breakfast (buffet or included)"},
                "Room & Miscellaneous Amenities": {"Terrace", "Private beach area or beachfront"},
            },
            rooms=[
                RoomDraft(
                    room_type="Deluxe Double Room",
                    bed_type="Double",
                    max_guests=2,
                    units_available=4,
                    facilities={"Air conditioning", "Free WiFi", "Ensuite bathroom", "View"},
                    price_lkr=Decimal("15000"),
                    photos=[f"{_CLOUDINARY_DEMO}/seaside-deluxe-1.jpg", f"{_CLOUDINARY_DEMO}/seaside-deluxe-2.jpg"],
                ),
                RoomDraft(
                    room_type="Family Room",
                    bed_type="King",
                    max_guests=4,
                    units_available=2,
                    facilities={"Air conditioning", "Free WiFi", "Flat-screen TV", "Seating area"},
                    price_lkr=Decimal("24000"),
                ),
            ],
            checkin_time="14:00",
            checkout_time="11:00",
            cancellation_policy="Free",
            photos=[f"{_CLOUDINARY_DEMO}/seaside-front.jpg", f"{_CLOUDINARY_DEMO}/seaside-beach.jpg"],
        ),
        PropertyDraft(
            property_type="Villa",
            name="Tea Hills Villa",
            description="Colonial bungalow above the tea estates, with a fireplace and garden.",
            street_address="45 Estate Road",
            city="Nuwara Eliya",
            state="Central Province",
            amenities={
                "Comfort & Utilities": {"Heating", "Non-smoking rooms", "Laundry services"},
                "Sport & Outdoor Activities": {"Hiking", "Horseback riding"},
                "Room & Miscellaneous Amenities": {"Garden", "Outdoor furniture"},
            },
            rooms=[
                RoomDraft(
                    room_type="Whole Villa",
                    bed_type="Queen",
                    max_guests=6,
                    units_available=1,
                    facilities={"Mountain view", "Electric kettle", "Tea/coffee maker", "Wardrobe/closet"},
                    price_lkr=Decimal("42000"),
                    photos=[f"{_CLOUDINARY_DEMO}/teahills-lounge.jpg"],
                ),
            ],
            checkin_time="13:00",
            checkout_time="10:00",
            cancellation_policy="Non-refundable",
            photos=[f"{_CLOUDINARY_DEMO}/teahills-garden.jpg"],
        ),
        PropertyDraft(
            property_type="Hotel",
            name="Lagoon Surf Lodge",
            street_address="Main Street",
            city="Arugam Bay",
            state="Eastern Province",
            amenities={"Sport & Outdoor Activities": {"Water sports facilities", "Snorkeling"}},
            rooms=[
                RoomDraft(
                    room_type="Cabana",
                    bed_type="Twin",
                    max_guests=2,
                    units_available=6,
                    facilities={"Fan", "Shower", "Towels", "Linen"},
                    price_lkr=Decimal("8500"),
                ),
            ],
        ),
    ]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Create the tables if needed, then (re)create the demo owner and listings.

    Idempotent: an existing demo owner is deleted first, and its properties,
    rooms and photos go with it.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.email == DEMO_USER["email"]))
        existing_user = result.scalar_one_or_none()

        if existing_user is not None:
            print(f"Demo user '{DEMO_USER['email']}' already exists. Deleting and re-seeding...")
            repository = ListingRepository(session, existing_user.id)
            property_ids = await session.scalars(select(Property.id).where(Property.user_id == existing_user.id))
            for property_id in property_ids.all():
                await repository.delete_property(property_id)
            await session.execute(delete(User).where(User.id == existing_user.id))
            await session.flush()

        user = User(
            email=DEMO_USER["email"],
            hashed_password=hash_password(DEMO_USER["password"]),
            name=DEMO_USER["name"],
            phone_number=DEMO_USER["phone_number"],
        )
        session.add(user)
        await session.flush()
        print(f"Created demo user: {user.email} (id={user.id})")

        submitter = ListingSubmitter(ListingRepository(session, user.id))
        created = []
        for draft in _listings():
            prop = await submitter.create(user.id, draft)
            created.append(prop)
            print(f"   {prop.name} ({prop.property_type}), {prop.city}: {len(prop.rooms)} room type(s)")

        await session.commit()

        print()
        print("=" * 60)
        print("Seed Summary")
        print("=" * 60)
        print(f"   Users:       1 ({DEMO_USER['email']} / {DEMO_USER['password']})")
        print(f"   Properties:  {len(created)}")
        print(f"   Room types:  {sum(len(p.rooms) for p in created)}")
        print("=" * 60)
        print("Done! You can now log in at /api/v1/auth/login")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
