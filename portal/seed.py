"""Sample data loaded into a fresh store.

Plain dicts keyed by wire names, fed through the same insert schemas
as user-submitted data.
"""
import json

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


def _weekly(slots):
    return json.dumps({day: list(slots) for day in _WEEKDAYS})


DOCTORS = [
    {
        "userId": 0,
        "name": "Sarah Johnson",
        "specialty": "Cardiology",
        "location": "New York, NY",
        "about": "Experienced cardiologist specializing in heart health and preventive care.",
        "education": "MD from Johns Hopkins University",
        "experience": "15",
        "rating": "4.8",
        "reviewCount": 120,
        "availability": _weekly(["09:00", "10:30", "14:00", "15:30"]),
        "imageUrl": "https://images.unsplash.com/photo-1559839734-2b71ea197ec2",
    },
    {
        "userId": 0,
        "name": "James Wilson",
        "specialty": "Family Medicine",
        "location": "Chicago, IL",
        "about": "Dedicated to providing comprehensive care for the entire family.",
        "education": "MD from University of Chicago",
        "experience": "10",
        "rating": "4.0",
        "reviewCount": 85,
        "availability": _weekly(["08:00", "09:30", "11:00", "15:00"]),
        "imageUrl": "https://images.unsplash.com/photo-1612349317150-e413f6a5b16d",
    },
    {
        "userId": 0,
        "name": "Michael Chen",
        "specialty": "Dermatology",
        "location": "Los Angeles, CA",
        "about": "Specialized in skin conditions and dermatological treatments.",
        "education": "MD from UCLA",
        "experience": "12",
        "rating": "5.0",
        "reviewCount": 142,
        "availability": _weekly(["10:00", "11:30", "13:00", "16:30"]),
        "imageUrl": "https://images.unsplash.com/photo-1594824476967-48c8b964273f",
    },
    {
        "userId": 0,
        "name": "Emily Rodriguez",
        "specialty": "Pediatrics",
        "location": "Houston, TX",
        "about": "Dedicated to providing the best care for children of all ages.",
        "education": "MD from Baylor College of Medicine",
        "experience": "8",
        "rating": "4.7",
        "reviewCount": 98,
        "availability": _weekly(["09:00", "10:30", "13:45", "15:15"]),
        "imageUrl": "https://images.unsplash.com/photo-1623854767648-e7bb8009f0db",
    },
]

INSURANCE_OPTIONS = [
    {
        "name": "Blue Cross Blue Shield",
        "type": "Private",
        "description": "Comprehensive health insurance coverage with a wide network of providers.",
        "coverageDetails": "Covers preventive care, specialist visits, emergency services, and prescription drugs.",
        "contactInfo": "1-800-123-4567, info@bcbs.com",
    },
    {
        "name": "Aetna Health",
        "type": "Private",
        "description": "Flexible plans designed to fit your needs and budget.",
        "coverageDetails": "Options for individuals, families, and employers with varying deductibles and copays.",
        "contactInfo": "1-800-987-6543, support@aetna.com",
    },
]

ASSISTANCE_PROGRAMS = [
    {
        "name": "Medicaid",
        "description": "Federal and state program that helps with medical costs for some people with limited income and resources.",
        "eligibilityCriteria": "Based on income, household size, disability, family status, and other factors.",
        "applicationProcess": "Apply through your state Medicaid agency or the Health Insurance Marketplace.",
        "contactInfo": "Visit www.medicaid.gov or call 1-877-267-2323",
    },
    {
        "name": "Medicare",
        "description": "Federal health insurance program for people who are 65 or older, certain younger people with disabilities, and people with End-Stage Renal Disease.",
        "eligibilityCriteria": "Age 65 or older, under 65 with certain disabilities, or any age with End-Stage Renal Disease.",
        "applicationProcess": "Apply through Social Security online, by phone, or in person.",
        "contactInfo": "1-800-MEDICARE (1-800-633-4227), www.medicare.gov",
    },
    {
        "name": "Children's Health Insurance Program (CHIP)",
        "description": "Provides low-cost health coverage to children in families that earn too much money to qualify for Medicaid but can't afford private insurance.",
        "eligibilityCriteria": "Eligibility varies by state but generally covers children up to age 19 in families with incomes up to 200% of the federal poverty level.",
        "applicationProcess": "Apply through your state CHIP agency or the Health Insurance Marketplace.",
        "contactInfo": "Visit www.insurekidsnow.gov or call 1-877-KIDS-NOW",
    },
]
