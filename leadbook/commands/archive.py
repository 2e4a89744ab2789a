"""
leads archive - View closed leads.
"""

from leadbook.lib.config import LeadbookConfig
from leadbook.lib.names import CompanyName
from leadbook.store.persistence import load_store


def cmd_archive(args, config: LeadbookConfig) -> int:
    """List archived leads, optionally for one company."""
    archive = load_store(config.archive_path)

    entries = sorted(archive, key=lambda item: item[0])
    if args.company:
        company = CompanyName(args.company)
        entries = [(c, positions) for c, positions in entries if c == company]

    if not entries:
        print("No archived leads")
        return 0

    print(f"{'COMPANY':<24} {'CLOSED':<12} {'POSITION':<28} OUTCOME")
    print("-" * 90)

    total = 0
    for company, positions in entries:
        for lead in positions:
            latest = lead.latest_status()
            closed_on = latest[0].date().isoformat() if latest else ""
            outcome = latest[1] if latest else ""
            print(f"{company.value:<24} {closed_on:<12} {lead.position[:28]:<28} {outcome}")
            total += 1

    print("-" * 90)
    print(f"{total} archived lead(s)")

    return 0
