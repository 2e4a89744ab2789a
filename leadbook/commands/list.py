"""
leads list - List open leads by company.
"""

from leadbook.lib.config import LeadbookConfig
from leadbook.store.persistence import load_store


def cmd_list(args, config: LeadbookConfig) -> int:
    """List every open position, companies sorted by name."""
    store = load_store(config.data_path)

    if not len(store):
        print("No open leads")
        print()
        print("Get started:")
        print("  leads new <company> <position> <source>")
        return 0

    print(f"{'COMPANY':<24} {'#':<3} {'POSITION':<28} {'TODO':<5} {'WAIT':<5} LATEST")
    print("-" * 90)

    for company, positions in sorted(store, key=lambda item: item[0]):
        for index, lead in enumerate(positions):
            latest = lead.latest_status()
            latest_text = latest[1] if latest else ""
            latest_text = latest_text[:30] + "..." if len(latest_text) > 30 else latest_text
            position = lead.position[:25] + "..." if len(lead.position) > 28 else lead.position
            print(f"{company.value:<24} {index:<3} {position:<28} "
                  f"{len(lead.todo):<5} {len(lead.wait):<5} {latest_text}")

    print("-" * 90)
    print(f"{store.count()} lead(s) at {len(store)} company(s)")

    return 0
