from __future__ import annotations

import re
from typing import List

from travana.api.models.schemas import CoverageInfo, ESIMPlan, ESIMRecommendation
from travana.core.config import settings

TIPS = [
    "Order your eSIM before departure for instant activation",
    "Make sure your phone supports eSIM technology",
    "Keep your physical SIM as backup",
    "Download offline maps before activating eSIM",
]


def airalo_url(country: str, plan: str) -> str:
    if settings.airalo_affiliate_link:
        return f"{settings.airalo_affiliate_link}?country={country}&plan={plan}"
    return f"https://airalo.com/{country}/{plan}"


def plan_days(plan: ESIMPlan) -> int | None:
    match = re.match(r"\s*(\d+)", plan.duration)
    return int(match.group(1)) if match else None


def global_plans() -> List[ESIMPlan]:
    return [
        ESIMPlan(
            id="global-1",
            name="Global Traveler",
            country="Global",
            data="1GB",
            duration="7 days",
            price=4.99,
            features=["Global coverage", "Instant activation", "24/7 support"],
            coverage=["Europe", "Asia", "Americas", "Oceania"],
            activationType="instant",
            affiliateUrl=airalo_url("global", "1gb-7days"),
        )
    ]


def country_plans(country: str) -> List[ESIMPlan]:
    key = country.lower()
    if key == "japan":
        return [
            ESIMPlan(
                id="japan-1",
                name="Japan Traveler",
                country="Japan",
                data="1GB",
                duration="7 days",
                price=4.99,
                features=["High-speed data", "Instant activation", "24/7 support"],
                coverage=["All Japan"],
                activationType="instant",
                affiliateUrl=airalo_url("japan", "1gb-7days"),
            )
        ]
    if key == "france":
        return [
            ESIMPlan(
                id="france-1",
                name="France Traveler",
                country="France",
                data="1GB",
                duration="7 days",
                price=3.99,
                features=["EU roaming", "Instant activation", "Free calls"],
                coverage=["France", "EU countries"],
                activationType="instant",
                affiliateUrl=airalo_url("france", "1gb-7days"),
            )
        ]
    return global_plans()


def filter_recommended_plans(plans: List[ESIMPlan], duration: int) -> List[ESIMPlan]:
    def long_enough(plan: ESIMPlan) -> bool:
        if "Unlimited" in plan.duration:
            return True
        days = plan_days(plan)
        return days is not None and days >= duration

    return sorted((p for p in plans if long_enough(p)), key=lambda p: p.price)[:3]


def alternative_plans(plans: List[ESIMPlan], recommended: List[ESIMPlan]) -> List[ESIMPlan]:
    recommended_ids = {p.id for p in recommended}
    return sorted((p for p in plans if p.id not in recommended_ids), key=lambda p: p.price)[:2]


class ESIMService:
    """Static Airalo catalogue; there is no live plan lookup."""

    def get_esim_plans(self, country: str) -> List[ESIMPlan]:
        return country_plans(country)

    def get_global_plans(self) -> List[ESIMPlan]:
        return global_plans()

    def get_recommendations(self, destination: str, duration: int = 7) -> ESIMRecommendation:
        plans = self.get_esim_plans(destination)
        recommended = filter_recommended_plans(plans, duration)
        return ESIMRecommendation(
            destination=destination,
            recommendedPlans=recommended,
            alternatives=alternative_plans(plans, recommended),
            tips=list(TIPS),
            coverageInfo=CoverageInfo(
                hasCoverage=True, bestProvider="Local Partner", averageSpeed="25 Mbps", networkType="4G/LTE"
            ),
        )
