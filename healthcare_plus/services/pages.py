from typing import List
from pydantic import BaseModel

class Link(BaseModel):
    label: str
    url: str

class Feature(BaseModel):
    title: str
    description: str

class LandingPage(BaseModel):
    brand: str = "HealthCare+"
    navigation: List[Link]
    headline: str
    tagline: str
    primary_actions: List[Link]
    features_heading: str
    features_intro: str
    features: List[Feature]
    call_to_action_heading: str
    call_to_action_text: str
    call_to_action_links: List[Link]
    footer: str

FEATURES = [
    Feature(
        title="Easy Appointment Booking",
        description="Book appointments with certified doctors in just a few clicks. Choose your preferred time and date.",
    ),
    Feature(
        title="Secure & Private",
        description="Your health data is protected with enterprise-grade security and HIPAA compliance.",
    ),
    Feature(
        title="Verified Doctors",
        description="All our doctors are certified professionals with verified credentials and expertise.",
    ),
    Feature(
        title="24/7 Support",
        description="Get help whenever you need it with our round-the-clock customer support team.",
    ),
    Feature(
        title="Quality Care",
        description="Experience top-quality healthcare services with personalized treatment plans.",
    ),
    Feature(
        title="Health Tracking",
        description="Monitor your health progress and maintain comprehensive medical records.",
    ),
]

def landing_page() -> LandingPage:
    return LandingPage(
        navigation=[
            Link(label="Sign In", url="/login"),
            Link(label="Get Started", url="/signup"),
        ],
        headline="Your Health, Our Priority",
        tagline=(
            "Connect with certified doctors, book appointments instantly, "
            "and manage your healthcare journey with ease."
        ),
        primary_actions=[
            Link(label="Join as Patient", url="/signup?type=patient"),
            Link(label="Join as Doctor", url="/signup?type=doctor"),
        ],
        features_heading="Why Choose HealthCare+?",
        features_intro=(
            "We provide a comprehensive healthcare platform designed for both "
            "patients and medical professionals."
        ),
        features=FEATURES,
        call_to_action_heading="Ready to Start Your Health Journey?",
        call_to_action_text="Join thousands of patients and doctors who trust HealthCare+ for their healthcare needs.",
        call_to_action_links=[
            Link(label="Find Doctors", url="/find-doctors"),
            Link(label="Get Started Free", url="/signup"),
        ],
        footer="© 2024 HealthCare+. All rights reserved.",
    )
