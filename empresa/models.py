from __future__ import annotations
from . import db
from .schemas.employees import MAX_LENGTHS

class Employee(db.Model):
    __tablename__ = "employees"
    # DNI como clave primaria: la base rechaza duplicados aunque dos altas pasen el pre-chequeo
    dni = db.Column(db.String(MAX_LENGTHS["dni"]), primary_key=True)
    name = db.Column(db.String(MAX_LENGTHS["name"]), nullable=False, default="")
    surname = db.Column(db.String(MAX_LENGTHS["surname"]), nullable=False, default="")
    role = db.Column(db.String(MAX_LENGTHS["role"]), nullable=False, default="")
    email = db.Column(db.String(MAX_LENGTHS["email"]), nullable=False, default="")

    def to_dict(self):
        return {
            "dni": self.dni,
            "name": self.name,
            "surname": self.surname,
            "role": self.role,
            "email": self.email,
        }

    def __repr__(self):
        return f"<Employee dni={self.dni!r} name={self.name!r}>"
