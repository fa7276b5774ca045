"""Sample Data Seeder — fills an empty store with demo listings.

Usage:
    python -m applixy.seed [--force]

Invariants:
    - Every document goes through SubmissionGateway (same validation and
      server timestamp as user submissions)
    - Without --force a collection that already has documents is left alone
"""

import argparse
import asyncio
import logging

from applixy.config import get_settings
from applixy.core.repository_protocols import Query
from applixy.infrastructure.database import init_db
from applixy.infrastructure.document_store import SqlDocumentStore
from applixy.infrastructure.identity import AccountDirectory, SessionIdentity
from applixy.infrastructure.observability import setup_logging
from applixy.services.submission_gateway import SubmissionGateway

logger = logging.getLogger(__name__)

SAMPLE_OPPORTUNITIES = [
    {
        "name": "Gates Millennium Scholars Program",
        "organization": "Gates Foundation",
        "type": "scholarship",
        "application_deadline": "2024-12-15",
        "award_amount": "Full tuition + expenses",
        "eligibility": "High school seniors, minimum 3.3 GPA, leadership potential",
        "description": (
            "Provides outstanding minority students with an opportunity to complete "
            "an undergraduate college education in any discipline they choose."
        ),
        "website": "https://www.gmsp.org",
        "target_demographic": ["STEM", "Leadership", "Minority Programs"],
    },
    {
        "name": "MIT Summer Research Program",
        "organization": "MIT",
        "type": "program",
        "application_deadline": "2024-12-30",
        "award_amount": "$5,000 stipend",
        "eligibility": "Undergraduate students, STEM majors, minimum 3.0 GPA",
        "description": "10-week summer research program at MIT for underrepresented students in STEM fields.",
        "website": "https://web.mit.edu/srp",
        "target_demographic": ["STEM", "Research", "Women in Tech"],
    },
    {
        "name": "Stanford University",
        "organization": "Stanford University",
        "type": "college",
        "application_deadline": "2024-11-30",
        "award_amount": "Need-based financial aid",
        "eligibility": "High school seniors, strong academic record",
        "description": "Private research university with a comprehensive financial aid program.",
        "website": "https://admission.stanford.edu",
        "target_demographic": ["STEM", "Arts", "Leadership"],
    },
    {
        "name": "Coca-Cola Scholars Foundation",
        "organization": "Coca-Cola Scholars Foundation",
        "type": "scholarship",
        "application_deadline": "January 15, 2025",
        "award_amount": 20000,
        "eligibility": "High school seniors, minimum 3.0 GPA, leadership and service",
        "description": "Merit-based scholarship recognizing students who demonstrate leadership and service.",
        "website": "https://www.coca-colascholarsfoundation.org",
        "target_demographic": ["Leadership", "Community Service"],
    },
    {
        "name": "Google Summer of Code",
        "organization": "Google",
        "type": "program",
        "application_deadline": "02/15/2025",
        "award_amount": "$3,000 stipend",
        "eligibility": "University students, programming experience",
        "description": "Global program that brings new contributors into open source software development.",
        "website": "https://summerofcode.withgoogle.com",
        "target_demographic": ["STEM", "Women in Tech", "Programming"],
    },
    {
        "name": "Harvard University",
        "organization": "Harvard University",
        "type": "college",
        "application_deadline": "2024-12-01",
        "award_amount": "Need-based financial aid",
        "eligibility": "High school seniors, exceptional academic achievement",
        "description": "Ivy League institution with generous financial aid for lower-income families.",
        "website": "https://college.harvard.edu",
        "target_demographic": ["STEM", "Arts", "Leadership"],
    },
    {
        "name": "Women in Technology Scholarship",
        "organization": "Women in Technology",
        "type": "scholarship",
        "application_deadline": "2025-01-30",
        "award_amount": 5000,
        "eligibility": "Female students, STEM majors, minimum 3.0 GPA",
        "description": "Scholarship supporting women pursuing degrees in technology and engineering.",
        "website": "https://www.womenintechnology.org",
        "target_demographic": ["STEM", "Women in Tech"],
    },
    {
        "name": "NASA Internship Program",
        "organization": "NASA",
        "type": "program",
        "application_deadline": "March 15",
        "award_amount": "$6,000 stipend",
        "eligibility": "Undergraduate/graduate students, STEM majors",
        "description": "Hands-on research experience at NASA centers across the country.",
        "website": "https://intern.nasa.gov",
        "target_demographic": ["STEM", "Research", "Women in Tech"],
    },
]

SAMPLE_MENTORS = [
    {
        "name": "Dr. Sarah Chen",
        "specialty": "STEM Applications",
        "experience": "10+ years",
        "email": "sarah.chen@example.com",
        "description": (
            "Former admissions officer helping students with STEM applications. "
            "Specializes in engineering and computer science programs."
        ),
        "rating": 4.9,
        "sessions_completed": 150,
    },
    {
        "name": "Marcus Johnson",
        "specialty": "Scholarship Strategy",
        "experience": "8+ years",
        "email": "marcus.j@example.com",
        "description": "Scholarship expert focused on merit-based and need-based scholarships.",
        "rating": 4.8,
        "sessions_completed": 200,
    },
    {
        "name": "Dr. Elena Rodriguez",
        "specialty": "First-Gen Support",
        "experience": "12+ years",
        "email": "elena.rodriguez@example.com",
        "description": "Admissions counselor supporting first-generation students through the application process.",
        "rating": 4.9,
        "sessions_completed": 180,
    },
    {
        "name": "James Park",
        "specialty": "Ivy League Prep",
        "experience": "15+ years",
        "email": "james.park@example.com",
        "description": "Former admissions reader with expertise in competitive applications and essay writing.",
        "rating": 4.7,
        "sessions_completed": 300,
    },
    {
        "name": "Dr. Aisha Williams",
        "specialty": "Minority Programs",
        "experience": "9+ years",
        "email": "aisha.williams@example.com",
        "description": "Diversity and inclusion expert on minority-focused scholarships and programs.",
        "rating": 4.8,
        "sessions_completed": 120,
    },
]

SAMPLE_RESOURCES = [
    {
        "name": "FAFSA Application",
        "description": "Free Application for Federal Student Aid",
        "link": "https://studentaid.gov/h/apply-for-aid/fafsa",
        "category": "Financial Aid",
        "icon": "dollarsign.circle.fill",
        "isExternal": True,
    },
    {
        "name": "Common App",
        "description": "Apply to multiple colleges with one application",
        "link": "https://www.commonapp.org",
        "category": "College Applications",
        "icon": "building.2.fill",
        "isExternal": True,
    },
    {
        "name": "College Essay Tips",
        "description": "Expert advice on writing compelling college essays",
        "link": "https://www.collegeessayguy.com",
        "category": "Writing Help",
        "icon": "pencil.and.outline",
        "isExternal": True,
    },
    {
        "name": "Scholarship Search Engines",
        "description": "Find scholarships that match your profile",
        "link": "https://www.fastweb.com",
        "category": "Scholarships",
        "icon": "magnifyingglass.circle.fill",
        "isExternal": True,
    },
    {
        "name": "College Board",
        "description": "SAT prep, AP courses, and college planning resources",
        "link": "https://www.collegeboard.org",
        "category": "Testing",
        "icon": "graduationcap.fill",
        "isExternal": True,
    },
    {
        "name": "Khan Academy",
        "description": "Free SAT prep and academic courses",
        "link": "https://www.khanacademy.org",
        "category": "Test Prep",
        "icon": "book.fill",
        "isExternal": True,
    },
    {
        "name": "Financial Aid Calculator",
        "description": "Estimate your financial aid eligibility",
        "link": "https://studentaid.gov/aid-estimator",
        "category": "Financial Aid",
        "icon": "calculator.fill",
        "isExternal": True,
    },
    {
        "name": "College Visit Guide",
        "description": "How to make the most of college visits",
        "link": "https://www.collegeboard.org/student/plan/college-visits",
        "category": "College Planning",
        "icon": "location.fill",
        "isExternal": True,
    },
]


async def seed(store, gateway: SubmissionGateway, force: bool = False) -> dict[str, int]:
    """Write the sample listings; returns documents written per collection."""
    plan = [
        (gateway.scholarship_collection, SAMPLE_OPPORTUNITIES),
        (gateway.mentor_collection, SAMPLE_MENTORS),
        (gateway.resource_collection, SAMPLE_RESOURCES),
    ]
    written: dict[str, int] = {}
    for collection, documents in plan:
        if not force and await store.fetch(Query(collection)):
            logger.info("Collection not empty, skipping", extra={"collection": collection})
            written[collection] = 0
            continue
        for fields in documents:
            await gateway.submit(collection, fields)
        written[collection] = len(documents)
    return written


async def _main(force: bool) -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings.database_url)
    try:
        if settings.database_auto_create:
            await manager.create_tables()
        store = SqlDocumentStore(manager, settings.snapshot_poll_interval_seconds)
        identity = SessionIdentity(AccountDirectory(manager))
        gateway = SubmissionGateway(
            store,
            identity,
            scholarship_collection=settings.scholarship_collection,
            mentor_collection=settings.mentor_collections[0],
            resource_collection=settings.resource_collection,
        )
        written = await seed(store, gateway, force)
        logger.info(f"Seed complete: {written}")
    finally:
        await manager.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the store with sample listings")
    parser.add_argument("--force", action="store_true", help="seed non-empty collections too")
    asyncio.run(_main(parser.parse_args().force))
