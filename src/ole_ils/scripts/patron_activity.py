import argparse
from typing import Any

from ole_ils.scripts.base import Script
from ole_ils.util.json import json_serializer


class PatronActivityScript(Script):
    """Log a patron in and print everything OLE knows about their
    account as JSON."""

    name = "OLE patron activity"

    @classmethod
    def arg_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Show a patron's profile, loans, fines and holds."
        )
        parser.add_argument("barcode", help="The patron's barcode.")
        parser.add_argument(
            "login", help="The patron's login, by default their last name."
        )
        return parser

    def do_run(self, args: argparse.Namespace) -> dict[str, Any] | None:
        patron = self.driver.patron_login(args.barcode, args.login)
        if patron is None:
            self.write(f"No patron matches barcode {args.barcode}.")
            return None

        activity = dict(
            profile=self.driver.get_my_profile(patron).as_record(),
            transactions=[
                t.as_record() for t in self.driver.get_my_transactions(patron)
            ],
            fines=[f.as_record() for f in self.driver.get_my_fines(patron)],
            holds=[h.as_record() for h in self.driver.get_my_holds(patron)],
        )
        self.write(json_serializer(activity, indent=2))
        return activity


def main() -> None:
    PatronActivityScript().run()
