"""
Sample catalog loaded on first start in development.

Seeding only runs against an empty catalog, so restarting the server never
duplicates listings.
"""

import logging
from sqlalchemy.orm import Session

from workwise.crud.slugs import slugify
from workwise.models.category import Category
from workwise.models.company import Company
from workwise.models.job import Job

logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Retail", "icon": "ShoppingBag"},
    {"name": "Hospitality", "icon": "Coffee"},
    {"name": "Construction", "icon": "HardHat"},
    {"name": "Logistics", "icon": "Truck"},
    {"name": "Admin & Office", "icon": "Briefcase"},
    {"name": "Security", "icon": "Shield"},
    {"name": "Call Centre", "icon": "Headphones"},
    {"name": "Cleaning", "icon": "Sparkles"},
]

COMPANIES = [
    {
        "name": "LogiCorp SA",
        "location": "Johannesburg, Gauteng",
        "description": "Warehousing and last-mile delivery across Gauteng.",
        "website": "https://logicorp.example.co.za",
    },
    {
        "name": "Cape Hospitality Group",
        "location": "Cape Town, Western Cape",
        "description": "Hotels, restaurants and events on the Atlantic seaboard.",
        "website": "https://capehospitality.example.co.za",
    },
    {
        "name": "BuildRight Construction",
        "location": "Durban, KwaZulu-Natal",
        "description": "Residential and commercial building contractor.",
        "website": "https://buildright.example.co.za",
    },
    {
        "name": "Ubuntu Retailers",
        "location": "Pretoria, Gauteng",
        "description": "Neighbourhood supermarkets serving township communities.",
        "website": "https://ubunturetail.example.co.za",
    },
    {
        "name": "SecureGuard Services",
        "location": "Johannesburg, Gauteng",
        "description": "Guarding and access control for offices and estates.",
        "website": "https://secureguard.example.co.za",
    },
]

JOBS = [
    {
        "title": "Warehouse Assistant",
        "company": "LogiCorp SA",
        "category": "Logistics",
        "location": "Johannesburg, Gauteng",
        "salary": "R6,500 - R8,000 per month",
        "job_type": "Full-time",
        "work_mode": "On-site",
        "is_featured": True,
        "description": "Pick, pack and load orders, keep stock areas tidy and support stock counts. Matric preferred; forklift licence an advantage.",
    },
    {
        "title": "Delivery Driver",
        "company": "LogiCorp SA",
        "category": "Logistics",
        "location": "Johannesburg, Gauteng",
        "salary": "R9,000 per month",
        "job_type": "Full-time",
        "work_mode": "On-site",
        "is_featured": False,
        "description": "Deliver parcels on scheduled routes. Valid Code 10 driver's licence and clean record required.",
    },
    {
        "title": "Waiter / Waitress",
        "company": "Cape Hospitality Group",
        "category": "Hospitality",
        "location": "Cape Town, Western Cape",
        "salary": "R4,500 + tips",
        "job_type": "Part-time",
        "work_mode": "On-site",
        "is_featured": True,
        "description": "Serve guests in a busy seafront restaurant. Good communication and teamwork skills; weekend availability.",
    },
    {
        "title": "General Labourer",
        "company": "BuildRight Construction",
        "category": "Construction",
        "location": "Durban, KwaZulu-Natal",
        "salary": "R180 per day",
        "job_type": "Contract",
        "work_mode": "On-site",
        "is_featured": False,
        "description": "Assist artisans on site with mixing, carrying and cleaning. Physical fitness and safety awareness required.",
    },
    {
        "title": "Cashier",
        "company": "Ubuntu Retailers",
        "category": "Retail",
        "location": "Pretoria, Gauteng",
        "salary": "R5,500 per month",
        "job_type": "Full-time",
        "work_mode": "On-site",
        "is_featured": True,
        "description": "Operate tills, handle cash accurately and help customers. Computer literacy and numeracy skills needed.",
    },
    {
        "title": "Security Officer",
        "company": "SecureGuard Services",
        "category": "Security",
        "location": "Johannesburg, Gauteng",
        "salary": "R7,000 per month",
        "job_type": "Full-time",
        "work_mode": "On-site",
        "is_featured": False,
        "description": "Control access, patrol premises and complete occurrence reports. PSIRA Grade C required.",
    },
    {
        "title": "Office Administrator",
        "company": "BuildRight Construction",
        "category": "Admin & Office",
        "location": "Durban, KwaZulu-Natal",
        "salary": "R10,000 per month",
        "job_type": "Full-time",
        "work_mode": "Hybrid",
        "is_featured": False,
        "description": "Manage filing, schedules and supplier invoices. Proficiency with Microsoft Office and time management skills.",
    },
]


def initialize_data(db: Session) -> bool:
    """
    Load the sample catalog into an empty database.

    Returns:
        True if data was inserted, False if the catalog already had categories
    """
    if db.query(Category).first() is not None:
        logger.info("Catalog already initialized, skipping sample data")
        return False

    categories = {}
    for item in CATEGORIES:
        category = Category(name=item["name"], slug=slugify(item["name"]), icon=item["icon"])
        db.add(category)
        categories[item["name"]] = category

    companies = {}
    for item in COMPANIES:
        company = Company(slug=slugify(item["name"]), **item)
        db.add(company)
        companies[item["name"]] = company

    for item in JOBS:
        fields = {k: v for k, v in item.items() if k not in ("company", "category")}
        db.add(Job(
            company=companies[item["company"]],
            category=categories[item["category"]],
            **fields,
        ))

    db.commit()
    logger.info(
        f"Sample data loaded: {len(CATEGORIES)} categories, "
        f"{len(COMPANIES)} companies, {len(JOBS)} jobs"
    )
    return True
