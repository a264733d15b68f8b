"""Seed data: campus resources and a demo student."""
from typing import Dict, List

from .connection import get_db_session, init_db
from .models import CampusResource, User, UserProfile

CAMPUS_RESOURCES: List[Dict] = [
    # Clubs
    {
        "category": "club",
        "name": "Computer Science Club",
        "description": "Weekly meetings to collaborate on projects, attend workshops and meet industry professionals.",
        "location": "Engineering Building, Room 201",
        "contact_info": "csclub@university.edu",
        "website": "https://university.edu/csclub",
        "hours": "Thursdays 6-8 PM",
        "tags": ["technology", "programming", "networking", "cs", "engineering"],
    },
    {
        "category": "club",
        "name": "Debate Team",
        "description": "Competitive debate team for regional and national tournaments. Open to all skill levels.",
        "location": "Student Union, Room 305",
        "contact_info": "debate@university.edu",
        "website": "https://university.edu/debate",
        "hours": "Tuesdays and Thursdays 7-9 PM",
        "tags": ["speaking", "argumentation", "competition", "communication"],
    },
    {
        "category": "club",
        "name": "Environmental Action Group",
        "description": "Sustainability initiatives, campus clean-ups and environmental advocacy.",
        "location": "Sustainability Center",
        "contact_info": "green@university.edu",
        "website": "https://university.edu/environmental",
        "hours": "Wednesdays 5-6 PM",
        "tags": ["environment", "sustainability", "volunteering", "activism"],
    },
    # Services
    {
        "category": "service",
        "name": "Academic Tutoring Center",
        "description": "Free tutoring for math, science, writing and other core subjects. Drop-in or by appointment.",
        "location": "Library, 2nd Floor",
        "contact_info": "(555) 123-4567",
        "website": "https://university.edu/tutoring",
        "hours": "Mon-Fri 9 AM-8 PM, Sat-Sun 12-6 PM",
        "tags": ["tutoring", "academic support", "study help", "math", "writing"],
    },
    {
        "category": "service",
        "name": "Career Services Center",
        "description": "Resume reviews, mock interviews, internship placement and career counseling.",
        "location": "Student Services Building, 1st Floor",
        "contact_info": "careers@university.edu",
        "website": "https://university.edu/careers",
        "hours": "Mon-Fri 9 AM-5 PM",
        "tags": ["career", "jobs", "internships", "resume", "interviews"],
    },
    {
        "category": "service",
        "name": "Writing Center",
        "description": "One-on-one consultations for essays, research papers and writing assignments.",
        "location": "Library, 3rd Floor",
        "contact_info": "writing@university.edu",
        "website": "https://university.edu/writing",
        "hours": "Mon-Thu 10 AM-8 PM, Fri 10 AM-4 PM",
        "tags": ["writing", "essays", "papers", "academic support"],
    },
    # Wellness
    {
        "category": "wellness",
        "name": "Counseling and Psychological Services",
        "description": "Free, confidential counseling, group sessions and same-day crisis appointments.",
        "location": "Health Center, 2nd Floor",
        "contact_info": "(555) 123-7000",
        "website": "https://university.edu/counseling",
        "hours": "Mon-Fri 8 AM-6 PM, 24/7 crisis line",
        "tags": ["mental health", "counseling", "crisis", "stress", "anxiety"],
    },
    {
        "category": "wellness",
        "name": "Student Health Center",
        "description": "Primary care, immunizations and health education for enrolled students.",
        "location": "Health Center, 1st Floor",
        "contact_info": "(555) 123-7100",
        "website": "https://university.edu/health",
        "hours": "Mon-Fri 8 AM-5 PM",
        "tags": ["health", "medical", "wellness"],
    },
    # Facilities
    {
        "category": "facility",
        "name": "Recreation Center",
        "description": "Gym, pool, climbing wall and intramural sports.",
        "location": "North Campus",
        "contact_info": "rec@university.edu",
        "website": "https://university.edu/rec",
        "hours": "Daily 6 AM-11 PM",
        "tags": ["gym", "fitness", "sports", "recreation"],
    },
    {
        "category": "facility",
        "name": "Main Library",
        "description": "Quiet study floors, group study rooms and research librarians.",
        "location": "Central Quad",
        "contact_info": "library@university.edu",
        "website": "https://university.edu/library",
        "hours": "Sun-Thu 24 hours, Fri-Sat 8 AM-10 PM",
        "tags": ["library", "study space", "research"],
    },
]


def create_campus_resources() -> int:
    """Insert the seed resources and return how many were created."""
    with get_db_session() as db:
        db.add_all([CampusResource(**resource) for resource in CAMPUS_RESOURCES])
        print(f"[OK] Created {len(CAMPUS_RESOURCES)} campus resources")
        return len(CAMPUS_RESOURCES)


def create_mock_user() -> int:
    """Create a demo student and return the user ID."""
    with get_db_session() as db:
        user = User(name="Alex Student", email="alex@example.com")
        user.profile = UserProfile(
            major="Computer Science",
            year="Sophomore",
            interests=["programming", "hiking", "music"],
            stress_level="5",
            goals="Keep a 3.5 GPA and land a summer internship",
        )
        db.add(user)
        db.flush()
        user_id = user.id
        print(f"[OK] Created user: {user.name} (ID: {user_id})")
        return user_id


def populate_mock_data() -> Dict[str, int]:
    """Populate the database with seed resources and a demo student.

    Returns how many resources were created and the demo student's id.
    """
    print("\n" + "=" * 60)
    print("Populating database with mock data...")
    print("=" * 60 + "\n")

    init_db()
    resources = create_campus_resources()
    user_id = create_mock_user()

    print("\n" + "=" * 60)
    print("[OK] Mock data population complete!")
    print("=" * 60)
    return {"resources": resources, "user_id": user_id}


def clear_all_data() -> None:
    """Clear all data from the database (for testing)."""
    from .models import Base
    from .connection import engine

    print("\n[WARN]  Dropping all tables...")
    Base.metadata.drop_all(bind=engine)
    print("[OK] All tables dropped")

    print("Recreating tables...")
    init_db()


if __name__ == "__main__":
    # Can be run directly to populate data
    clear_all_data()
    populate_mock_data()
