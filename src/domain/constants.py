"""Domain constants for clinic finance reporting."""

EXPENSE_TYPE_NORMAL = "normal"
EXPENSE_TYPE_DOCTOR_SALARY = "doctor_salary"
EXPENSE_TYPES = (EXPENSE_TYPE_NORMAL, EXPENSE_TYPE_DOCTOR_SALARY)

EXPENSE_TYPE_LABELS = {
    EXPENSE_TYPE_DOCTOR_SALARY: "Doctor Salaries",
    EXPENSE_TYPE_NORMAL: "Other Expenses",
}

REPORT_TYPES = (
    "laboratory",
    "pharmacy",
    "glass",
    "ophthalmology",
)

# Revenue totals always sum the collected amount, never the billed one.
REVENUE_BASIS = "amount_paid"

UNCATEGORIZED = "Uncategorized"

HEALTHY_MARGIN_THRESHOLD = 20
FAIR_MARGIN_THRESHOLD = 10


__all__ = [
    "EXPENSE_TYPE_NORMAL",
    "EXPENSE_TYPE_DOCTOR_SALARY",
    "EXPENSE_TYPES",
    "EXPENSE_TYPE_LABELS",
    "REPORT_TYPES",
    "REVENUE_BASIS",
    "UNCATEGORIZED",
    "HEALTHY_MARGIN_THRESHOLD",
    "FAIR_MARGIN_THRESHOLD",
]
