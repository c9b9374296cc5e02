from .pet import Pet, PetGender, PetSize
from .product import Product
from .reference import Category, Breed, Color
from .user import User, UserRole

__all__ = [
    'Pet', 'PetGender', 'PetSize',
    'Product',
    'Category', 'Breed', 'Color',
    'User', 'UserRole'
]
