"""
Seed the local catalog file from NUSMods.

Fetches each module code in CODES (plus, with --follow, every prerequisite
those modules mention) and writes the result to data/modules.txt, keeping
any modules already in the file.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --follow CS2113 CS2040C
"""

import argparse
import random
import sys
import time

from modcatalog.cli import configure_logging
from modcatalog.config import DATA_DIR, MODULES_FILE, DEFAULT_ACAD_YEAR
from modcatalog.data import load_modules, save_catalog
from modcatalog.remote import NusModsClient

# --- CONFIGURATION ---
# Core modules of the NUS Computer Science degree
CODES = [
    "CS1101S", "CS1231S", "CS2030S", "CS2040S", "CS2100",
    "CS2101", "CS2103T", "CS2106", "CS2109S", "CS3230",
    "MA1521", "MA1522", "ST2334",
]
# ---------------------


def run(codes, acad_year, follow, output_path):
    catalog, warnings = load_modules(output_path)
    for message in warnings:
        print(f"⚠️  {message}")
    print(f"📂 {len(catalog)} modules already in {output_path}")

    client = NusModsClient(acad_year)
    queue = [c.upper() for c in codes]
    seen = set()

    while queue:
        code = queue.pop(0)
        if code in seen:
            continue
        seen.add(code)

        print(f"📥 {code}...", end=" ", flush=True)
        module = client.fetch_module(code)
        if module is None:
            print("❌")
            continue

        catalog = {**catalog, module.code: module}
        print(f"✅ {module.name}")

        if follow:
            queue.extend(c for c in module.prerequisites.codes() if c not in seen)

        # Polite pause between requests
        time.sleep(random.uniform(0.2, 0.6))

    problem = save_catalog(output_path, catalog)
    if problem:
        print(f"❌ {problem}")
        return 1
    print(f"✨ Done. {len(catalog)} modules saved to '{output_path}'")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Seed data/modules.txt from NUSMods.")
    parser.add_argument("codes", nargs="*", default=CODES, help="Module codes to fetch")
    parser.add_argument("--year", default=DEFAULT_ACAD_YEAR, help="Academic year, e.g. 2025-2026")
    parser.add_argument("--follow", action="store_true", help="Also fetch every prerequisite mentioned")
    parser.add_argument("--output", default=str(DATA_DIR / MODULES_FILE), help="Catalog file to update")
    args = parser.parse_args()

    configure_logging()
    print(f"🚀 Seeding catalog for {args.year}")
    print("-" * 60)
    return run(args.codes, args.year, args.follow, args.output)


if __name__ == "__main__":
    sys.exit(main())
