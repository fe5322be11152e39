# client/gen_data.py
import random

from app.validation import ColorPreference, format_tax_id, generate_tax_id

FIRST = ["Ana","Bruno","Carla","Diego","Elisa","Felipe","Gabriela","Heitor","Isabela","João","Larissa","Marcos"]
LAST  = ["Silva","Santos","Oliveira","Souza","Lima","Pereira","Costa","Almeida","Ferreira","Rodrigues","Gomes","Martins"]
NOTES = ["", "Prefers contact by email.", "Referred by a friend.", "Call after 6pm.", ""]

def _name(): return f"{random.choice(FIRST)} {random.choice(LAST)}"
def _email(n): return f"{''.join(c for c in n.lower() if c.isascii() and c.isalpha())}{random.randint(1,999)}@example.com"

def gen_customer_record():
    """A random form fill with a valid, masked CPF (demo mode)."""
    n = _name()
    return {
        "fullName": n,
        "cpf": format_tax_id(generate_tax_id()),
        "email": _email(n),
        "colorPreference": random.choice(list(ColorPreference)).value,
        "notes": random.choice(NOTES),
    }
