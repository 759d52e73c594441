"""
Management command: assign_machine_roles

Stores each machine's role once, derived from its name/comment and creation
order, so the machine suggestion no longer depends on those texts.

Usage:
    python manage.py assign_machine_roles            # only machines without a role
    python manage.py assign_machine_roles --force    # recompute every role
    python manage.py assign_machine_roles --dry-run
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from production.classifier import REQUIRED_MACHINES, legacy_machine_roles
from production.models import Machine


class Command(BaseCommand):
    help = "Persist machine roles derived from machine names"

    def add_arguments(self, parser):
        parser.add_argument("--force", action="store_true", help="Overwrite roles that are already set")
        parser.add_argument("--dry-run", action="store_true", help="Show the result without saving")

    def handle(self, *args, **options):
        machines = list(Machine.objects.filter(is_active=True))
        if len(machines) < REQUIRED_MACHINES:
            raise CommandError(f"{REQUIRED_MACHINES} aktív gép szükséges, jelenleg {len(machines)} van.")

        if options["force"]:
            candidates = machines
            taken = set()
        else:
            candidates = [m for m in machines if not m.role]
            taken = {m.role for m in machines if m.role}

        assignments = {
            role: machine for role, machine in legacy_machine_roles(candidates).items() if role not in taken
        }
        if not assignments:
            self.stdout.write("Nothing to assign.")
            return

        for role, machine in sorted(assignments.items()):
            self.stdout.write(f"  {machine.name} -> {role.label} ({role.value})")

        if options["dry_run"]:
            return

        with transaction.atomic():
            if options["force"]:
                Machine.objects.filter(pk__in=[m.pk for m in machines]).update(role="")
            for role, machine in assignments.items():
                machine.role = role
                machine.save(update_fields=["role"])
        self.stdout.write(self.style.SUCCESS(f"{len(assignments)} machine role(s) saved."))
