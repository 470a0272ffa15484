"""
Static estimator catalog: services, capabilities, scope tables, add-ons,
growth packages, pricing rules and wizard steps.

Data only. ``build_catalog`` in ``catalog_store`` normalizes these tables.
"""

from __future__ import annotations

from typing import Any


SERVICES: list[dict[str, Any]] = [
    {
        "id": "new_ghl_setup",
        "name": "New GHL Setup",
        "description": "Get a professional, turnkey foundation in 7 days without the DIY headache.",
        "icon": "fa-solid fa-rocket",
        "base_price": 297,
        "base_price_range": {"min": 97, "max": 297},
        "category": "ghl",
        "recommended": True,
        "capabilities": ["funnels", "crm", "workflow_automation"],
    },
    {
        "id": "platform_migration",
        "name": "Platform Migration",
        "description": "Stop overpaying for 5 different tools. We'll move your entire business to GHL seamlessly.",
        "icon": "fa-solid fa-right-left",
        "base_price": 997,
        "base_price_range": {"min": 697, "max": 997},
        "category": "ghl",
        "capabilities": ["data_migration", "workflow_transfer"],
    },
    {
        "id": "fix_optimize",
        "name": "Fix & Optimize",
        "description": "Is your GHL messy? We'll audit your tech stack and plug the leaks in your automation.",
        "icon": "fa-solid fa-screwdriver-wrench",
        "base_price": 497,
        "base_price_range": {"min": 297, "max": 497},
        "category": "ghl",
        "capabilities": ["audit", "optimization", "bug_fixes"],
    },
    {
        "id": "monthly_management",
        "name": "Monthly Management",
        "description": "Your own dedicated GHL expert for less than a part-time VA's salary.",
        "icon": "fa-solid fa-calendar-check",
        "base_price": 997,
        "base_price_range": {"min": 127, "max": 997},
        "category": "ghl",
        "is_monthly": True,
        "capabilities": ["campaign_launches", "tech_support", "reporting"],
    },
]

CAPABILITIES: list[dict[str, Any]] = [
    {
        "id": "funnels",
        "name": "Funnels & Websites",
        "price": 297,
        "icon": "fa-solid fa-layer-group",
        "pitch": "Your 24/7 digital salesperson. High-converting, mobile-optimized funnels that turn cold traffic into loyal customers.",
        "is_popular_bundle_part": True,
    },
    {
        "id": "crm",
        "name": "CRM & Pipelines",
        "price": 197,
        "icon": "fa-solid fa-users",
        "pitch": "Stop losing leads in the cracks. Your entire sales journey mapped so you always know who to call and when to close.",
        "is_popular_bundle_part": True,
    },
    {
        "id": "workflow_automation",
        "name": "Workflow Automation",
        "price": 247,
        "icon": "fa-solid fa-gears",
        "pitch": "Put your business on autopilot: follow-ups, lead nurturing and tasks, saving 10+ hours of manual work every week.",
        "is_popular_bundle_part": True,
    },
    {
        "id": "reputation_management",
        "name": "Reputation Management",
        "price": 147,
        "icon": "fa-solid fa-star",
        "pitch": "Dominate local search. Automated review requests turn every happy customer into a 5-star Google rating.",
    },
    {
        "id": "social_media_planner",
        "name": "Social Media Planner",
        "price": 147,
        "icon": "fa-solid fa-calendar-days",
        "pitch": "One dashboard, all your socials. Schedule a month's worth of content in minutes.",
    },
    {
        "id": "calendar",
        "name": "Calendar System",
        "price": 97,
        "icon": "fa-solid fa-calendar-days",
        "pitch": "Say goodbye to 'When are you free?' emails. A booking system that syncs with your phone and fills your schedule.",
    },
    # Core deliverables of the non-setup services; always included with their service.
    {"id": "data_migration", "name": "Data Migration", "price": 0},
    {"id": "workflow_transfer", "name": "Workflow Transfer", "price": 0},
    {"id": "audit", "name": "Tech Stack Audit", "price": 0},
    {"id": "optimization", "name": "Automation Optimization", "price": 0},
    {"id": "bug_fixes", "name": "Bug Fixes", "price": 0},
    {"id": "campaign_launches", "name": "Campaign Launches", "price": 0},
    {"id": "tech_support", "name": "Tech Support", "price": 0},
    {"id": "reporting", "name": "Monthly Reporting", "price": 0},
]

INDUSTRIES: list[dict[str, Any]] = [
    {"id": "medical_aesthetics", "name": "Medical Aesthetics", "subtitle": "Cosmetic Clinics", "icon": "fa-solid fa-spa", "multiplier": 1.3},
    {"id": "private_healthcare", "name": "Private Healthcare", "subtitle": "Dental • Specialty Healthcare", "icon": "fa-solid fa-stethoscope", "multiplier": 1.3},
    {"id": "home_services", "name": "Home Services", "subtitle": "Roofing • HVAC • Plumbing • Electrical • Pest Control", "icon": "fa-solid fa-toolbox", "multiplier": 1.0},
    {"id": "education_training", "name": "Education & Training", "subtitle": "Private Colleges • Skills Training • Coaching Institutes", "icon": "fa-solid fa-graduation-cap", "multiplier": 1.0},
    {"id": "real_estate", "name": "Real Estate", "subtitle": "Agencies & Teams", "icon": "fa-solid fa-house", "multiplier": 1.0},
    {"id": "automotive_services", "name": "Automotive Services", "subtitle": "Detailing • Repairs • Dealerships", "icon": "fa-solid fa-car-side", "multiplier": 1.0},
    {"id": "professional_services", "name": "Professional Services", "subtitle": "Consultants • Accountants • Agencies", "icon": "fa-solid fa-briefcase", "multiplier": 1.1},
    {"id": "legal_firms", "name": "Legal Firms", "subtitle": "Personal Injury • Immigration • Family Law", "icon": "fa-solid fa-scale-balanced", "multiplier": 1.2},
    {"id": "fitness_training", "name": "Fitness Studios", "subtitle": "Personal Training", "icon": "fa-solid fa-dumbbell", "multiplier": 1.0},
    {"id": "food_catering", "name": "Food & Catering", "subtitle": "Restaurants • Catering Services", "icon": "fa-solid fa-utensils", "multiplier": 1.0},
    {"id": "other", "name": "Others", "subtitle": "", "icon": "fa-solid fa-shapes", "multiplier": 1.0},
]

BUSINESS_SCALES: list[dict[str, Any]] = [
    {"id": "solopreneur", "name": "Solopreneur", "description": "Perfect for those starting or staying lean.", "icon": "fa-solid fa-user", "adder": 0},
    {"id": "growing", "name": "Growing Biz", "description": "Built to scale with your increasing lead flow.", "icon": "fa-solid fa-seedling", "adder": 300},
    {"id": "scale", "name": "Scale/Agency", "description": "Infrastructure designed for high-volume stability.", "icon": "fa-solid fa-chart-line", "adder": 700},
    {"id": "enterprise", "name": "Enterprise", "description": "White-glove architecture for massive operations.", "icon": "fa-solid fa-building-columns", "adder": 1500},
]

SERVICE_LEVELS: list[dict[str, Any]] = [
    {
        "id": "standard",
        "name": "Standard (DIY Hybrid)",
        "description": "We build it, you run it.",
        "features": ["Basic snapshot install", "Standard timeline"],
        "adder": 0,
    },
    {
        "id": "premium",
        "name": "Premium (Done-With-You)",
        "description": "We build it and train your team to be pros.",
        "features": ["Full setup", "Priority support", "Training included"],
        "adder": 497,
        "popular": True,
    },
    {
        "id": "luxury",
        "name": "Luxury (White Glove)",
        "description": "Total peace of mind. We handle every single click.",
        "features": ["Custom design", "Advanced automation", "Priority 48h support"],
        "adder": 997,
    },
]

# High-urgency upsells first so they show above the "view more" cutoff.
ADDONS: list[dict[str, Any]] = [
    {"id": "rush_delivery", "name": "Rush Delivery (48-72h)", "description": "We clear our schedule to launch your project yesterday.", "icon": "fa-solid fa-bolt", "price": 300},
    {"id": "snapshot_creation", "name": "Snapshot Creation", "description": "Package your setup into a deployable asset you can sell.", "icon": "fa-solid fa-box-archive", "price": 297},
    {"id": "api_integration", "name": "Custom API/Webhook", "description": "Custom bridges for your data.", "icon": "fa-solid fa-code", "price": 497},
    {"id": "zoom_handoff", "name": "Live Zoom Handoff", "description": "1-on-1 walkthrough to ensure you are 100% confident.", "icon": "fa-solid fa-video", "price": 147},
    {"id": "hipaa", "name": "Advanced HIPAA Compliance", "description": "Configure GHL for strict medical security standards.", "icon": "fa-solid fa-shield-halved", "price": 497},
    {"id": "ab_testing", "name": "A/B Split Testing Setup", "description": "Find the winning design that brings in the most leads.", "icon": "fa-solid fa-flask", "price": 197},
    {"id": "custom_css", "name": "Custom CSS/Branding", "description": "High-end, bespoke brand aesthetic that builds instant trust.", "icon": "fa-solid fa-paintbrush", "price": 247},
    {"id": "email_audit", "name": "Email Deliverability Audit", "description": "Ensure your emails land in the inbox, not the spam folder.", "icon": "fa-solid fa-envelope-open-text", "price": 197},
]

BUNDLES: list[dict[str, Any]] = [
    {
        "id": "authority_bundle",
        "name": "The Authority Bundle",
        "included": ["reputation_management", "social_media_planner", "custom_css"],
        "bundle_price": 447,
        "savings": 94,
        "pitch": "Everything you need to look like the market leader and dominate local search.",
    },
    {
        "id": "scale_safety_bundle",
        "name": "The Scale & Safety Bundle",
        "included": ["api_integration", "snapshot_creation", "hipaa"],
        "bundle_price": 997,
        "savings": 294,
        "pitch": "Built for high-volume agencies and healthcare providers needing enterprise-grade security.",
    },
    {
        "id": "performance_pro",
        "name": "The Performance Pro",
        "included": ["ab_testing", "email_audit", "zoom_handoff"],
        "bundle_price": 447,
        "savings": 94,
        "pitch": "Optimize your ROI. We ensure emails hit the inbox and funnels convert.",
    },
]

PRICING_RULES: dict[str, Any] = {
    "currency": "USD",
    "default_bundle_discount": 0.05,
    "anchor_multiplier": 1.6,
    "anchor_range_adder": {"min": 340, "max": 525},
    "monthly_management_adder": 0,
    "included_capabilities_by_service": {
        "new_ghl_setup": ["funnels", "crm", "workflow_automation"],
        "platform_migration": ["data_migration", "workflow_transfer"],
        "fix_optimize": ["audit", "optimization", "bug_fixes"],
        "monthly_management": ["campaign_launches", "tech_support", "reporting"],
    },
}

STEPS: list[dict[str, Any]] = [
    {
        "id": "services",
        "label": "Services",
        "number": 1,
        "microcopy": [
            "Bundle & Save: multi-service selections automatically trigger our agency partnership discounts.",
            "Tip: start with the services that unlock revenue fastest. You can fine-tune details next.",
        ],
    },
    {
        "id": "scope",
        "label": "Scope",
        "number": 2,
        "microcopy": [
            "Applies to all services: your industry and scale shape pricing, timeline and workflow templates.",
            "Not sure? Pick the nearest option for now. You can change it before submitting.",
        ],
    },
    {
        "id": "details",
        "label": "Details",
        "number": 3,
        "microcopy": [
            "Configure each service: capabilities, service level, then optional add-ons.",
        ],
    },
    {
        "id": "review",
        "label": "Review",
        "number": 4,
        "microcopy": [
            "Almost there! Review your selections below. You can go back to make changes anytime.",
            "Benchmark: compare your investment against typical on-shore agency pricing.",
        ],
    },
    {
        "id": "contact",
        "label": "Contact",
        "number": 5,
        "microcopy": [
            "Last step: share your details so we can send your roadmap and next steps.",
            "Want a Loom? Toggle the video option and we'll record a walkthrough of your plan.",
        ],
    },
]

RAW_CATALOG: dict[str, Any] = {
    "services": SERVICES,
    "capabilities": CAPABILITIES,
    "industries": INDUSTRIES,
    "business_scales": BUSINESS_SCALES,
    "service_levels": SERVICE_LEVELS,
    "addons": ADDONS,
    "bundles": BUNDLES,
    "pricing_rules": PRICING_RULES,
    "steps": STEPS,
}
