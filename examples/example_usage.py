"""Example: compute a payroll with the service layer (no Flask).

Runs against the in-memory store seeded with the demo data.
"""

from src.hr_portal.hr_portal.config import testing
from src.hr_portal.hr_portal.container import build_container
from src.hr_portal.hr_portal.database.seed import seed_demo_data


def main():
    container = build_container(testing)
    seed_demo_data(container.document_service)

    result = container.payroll_service.preview({"employeeId": "EMP001", "month": 3, "year": 2025, "bonuses": 1500})
    if not result.success:
        print(result.error)
        return
    breakdown = result.data.breakdown
    print(f"{result.data.employee_name}: gross {breakdown.gross_pay:.2f}, net {breakdown.net_pay:.2f}")


if __name__ == "__main__":
    main()
