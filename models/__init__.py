"""
Imports of the table models are needed so Base.metadata knows every table before create_all.
"""
from models.base import Base
from models.category import Category
from models.product import Product
