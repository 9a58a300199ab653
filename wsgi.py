from flask import Flask
from empresa import create_app, db

app: Flask = create_app()

# create_all no falla si ya existen tablas
with app.app_context():
    db.create_all()
