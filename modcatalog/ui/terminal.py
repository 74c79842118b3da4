"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the modcatalog package.
"""

from ..models import Module, Major


class TerminalDisplay:
    """
    Pretty terminal output for catalog contents, majors, and the
    dependency graph.

    To render elsewhere (web page, JSON API), write a class with the same
    method signatures; the Catalog orchestrator only calls these methods.
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    @classmethod
    def print_header(cls, title: str):
        """Print a section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_module(cls, module: Module):
        """Print one module as a table row."""
        prereqs = str(module.prerequisites)
        prereq_str = f"{cls.DIM}{prereqs}{cls.RESET}" if module.prerequisites.is_empty() else prereqs
        print(f"  {cls.GREEN}{module.code:<10}{cls.RESET} {module.name[:38]:<38} "
              f"{module.credits:>3}  {module.type:<10} {prereq_str}")

    @classmethod
    def print_modules(cls, catalog: dict):
        """Print the whole module catalog sorted by code."""
        cls.print_header(f"MODULE CATALOG ({len(catalog)} modules)")

        if not catalog:
            print(f"\n  {cls.DIM}(no modules){cls.RESET}")
            return

        print(f"\n  {cls.BOLD}{'CODE':<10} {'NAME':<38} {'MC':>3}  {'TYPE':<10} {'PREREQUISITES'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 80}{cls.RESET}")
        for code in sorted(catalog):
            cls.print_module(catalog[code])

    @classmethod
    def print_majors(cls, majors: dict):
        """Print every major with its module list and credit total."""
        cls.print_header(f"MAJORS ({len(majors)})")

        if not majors:
            print(f"\n  {cls.DIM}(no majors){cls.RESET}")
            return

        for name in sorted(majors):
            major: Major = majors[name]
            cls.print_subheader(f"{major.name} ({major.abbreviation})")
            print(f"  {cls.BOLD}Total credits:{cls.RESET} {major.total_credits}")
            if major.modules:
                print(f"  {cls.BOLD}Modules:{cls.RESET} {', '.join(major.module_codes)}")
            else:
                print(f"  {cls.DIM}(no catalog modules){cls.RESET}")

    @classmethod
    def print_graph(cls, graph: dict, code: str = None):
        """Print the dependency graph, or one node's dependents if ``code`` is given."""
        if code is not None:
            code = code.strip().upper()
            cls.print_header(f"MODULES THAT REQUIRE {code}")
            if code not in graph:
                print(f"\n  {cls.RED}{code} is not in the dependency graph{cls.RESET}")
                return
            dependents = graph[code]
            if not dependents:
                print(f"\n  {cls.DIM}(no dependents){cls.RESET}")
            for dependent in dependents:
                print(f"    • {dependent}")
            return

        cls.print_header("PREREQUISITE GRAPH")
        print()
        for node, dependents in graph.items():
            arrow = f"{cls.GREEN}→{cls.RESET}" if dependents else f"{cls.DIM}→{cls.RESET}"
            print(f"  {cls.BOLD}{node:<10}{cls.RESET} {arrow} [{', '.join(dependents)}]")

    @classmethod
    def print_warnings(cls, warnings: list):
        """Print load/save diagnostics; prints nothing when there are none."""
        if not warnings:
            return
        cls.print_subheader(f"{len(warnings)} warning(s)")
        for message in warnings:
            print(f"  {cls.YELLOW}⚠ {message}{cls.RESET}")

    @classmethod
    def print_success(cls, message: str):
        print(f"\n  {cls.GREEN}✓ {message}{cls.RESET}")

    @classmethod
    def print_error(cls, message: str):
        print(f"\n  {cls.RED}✗ {message}{cls.RESET}")
