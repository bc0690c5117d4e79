"""
Domain: Service catalog.

Static categories and services offered on the storefront. Leads copy the
service title into service_name at submission time, so edits here never
rewrite lead history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Category:
    category_id: str
    name: str
    description: str
    icon: str
    slug: str
    featured: bool = False


@dataclass(frozen=True, slots=True)
class Service:
    service_id: str
    category_id: str
    title: str
    description: str
    hourly_rate: int  # INR
    features: Tuple[str, ...] = ()

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, description and features."""
        term = term.lower()
        return (
            term in self.title.lower()
            or term in self.description.lower()
            or any(term in feature.lower() for feature in self.features)
        )


CATEGORIES: Tuple[Category, ...] = (
    Category("design-creative", "Design & Creative", "UI/UX Design, Wireframing, Mobile UI", "fas fa-palette", "design-creative"),
    Category("web-development", "Web Development", "Frontend, Backend, CMS, PWA", "fas fa-code", "web-development"),
    Category("mobile-app-dev", "Mobile App Dev", "Android, iOS, React Native", "fas fa-mobile-alt", "mobile-app-dev", featured=True),
    Category("ecommerce", "E-commerce", "Shopify, Magento, Custom Store", "fas fa-shopping-cart", "ecommerce"),
    Category("devops", "DevOps", "CI/CD, Cloud Migration, Terraform", "fas fa-cloud", "devops"),
    Category("consulting", "Consulting", "Strategy, Digital Transformation", "fas fa-lightbulb", "consulting"),
)

SERVICES: Tuple[Service, ...] = (
    Service(
        "android-native", "mobile-app-dev", "Android Native App",
        "High-performance native Android apps using Kotlin/Java", 1250,
        ("Native Performance", "Material Design", "Play Store Ready"),
    ),
    Service(
        "ios-native", "mobile-app-dev", "iOS Native App",
        "Premium iOS apps using Swift with App Store optimization", 1250,
        ("iOS Guidelines", "App Store Ready", "Premium UX"),
    ),
    Service(
        "flutter-app", "mobile-app-dev", "Flutter App",
        "Cross-platform apps with single codebase for iOS & Android", 1250,
        ("Cross-Platform", "Fast Development", "Single Codebase"),
    ),
    Service(
        "react-native-app", "mobile-app-dev", "React Native App",
        "Native mobile apps using React Native framework", 1250,
        ("React Ecosystem", "Hot Reload", "Cross-Platform"),
    ),
    Service(
        "backend-api", "mobile-app-dev", "Backend API",
        "Scalable backend APIs using Firebase or Node.js", 1250,
        ("RESTful APIs", "Real-time Database", "Authentication"),
    ),
    Service(
        "app-ui-design", "mobile-app-dev", "App UI Design",
        "Modern, user-friendly mobile app interface design", 1250,
        ("Modern Design", "User-Friendly", "Figma Prototypes"),
    ),
)
