# Overview: Enumerations and reference lists shared by models, validation and reports.

CUSTOMER_VISA_STATUSES = ("pending", "processing", "approved", "rejected", "issued", "expired")

# Visa records track a narrower lifecycle than Customer.visa_status
VISA_STATUSES = ("pending", "issued", "expired")

EGYPT_TO_SAUDI = "egypt-to-saudi"
SAUDI_TO_EGYPT = "saudi-to-egypt"
TRAVEL_DIRECTIONS = (EGYPT_TO_SAUDI, SAUDI_TO_EGYPT)

EXPENSE_CATEGORIES = ("office", "transport", "marketing", "salaries", "utilities", "other")

# Display labels, also matched by the expense search filter
EXPENSE_CATEGORY_LABELS = {
    "office": "مصاريف مكتبية",
    "transport": "مواصلات",
    "marketing": "تسويق",
    "salaries": "رواتب",
    "utilities": "مرافق",
    "other": "أخرى",
}

DEBT_RECEIVABLE = "receivable"
DEBT_PAYABLE = "payable"
DEBT_TYPES = (DEBT_RECEIVABLE, DEBT_PAYABLE)

EGYPTIAN_GOVERNORATES = (
    "القاهرة", "الجيزة", "الإسكندرية", "الدقهلية", "البحر الأحمر", "البحيرة",
    "الفيوم", "الغربية", "الإسماعيلية", "المنوفية", "المنيا", "القليوبية",
    "الوادي الجديد", "السويس", "أسوان", "أسيوط", "بني سويف", "بورسعيد",
    "دمياط", "الشرقية", "جنوب سيناء", "كفر الشيخ", "مطروح", "الأقصر",
    "قنا", "شمال سيناء", "سوهاج",
)

SAUDI_CITIES = (
    "مكة المكرمة", "المدينة المنورة", "جدة", "الرياض", "الدمام", "الطائف",
)

# (origin choices, destination choices) per travel direction
ROUTE_LOCATIONS = {
    EGYPT_TO_SAUDI: (EGYPTIAN_GOVERNORATES, SAUDI_CITIES),
    SAUDI_TO_EGYPT: (SAUDI_CITIES, EGYPTIAN_GOVERNORATES),
}
