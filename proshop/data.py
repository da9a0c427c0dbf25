# proshop/data.py
# Seed fixtures loaded by proshop.seeder. Passwords are hashed at import time.
from typing import Any, Dict, List

from .security import hash_password

USERS: List[Dict[str, Any]] = [
    {
        "name": "Admin User",
        "email": "admin@example.com",
        "password": hash_password("123456"),
        "is_admin": True,
    },
    {
        "name": "Justin Cho",
        "email": "justin@example.com",
        "password": hash_password("123456"),
    },
    {
        "name": "Amber Lai",
        "email": "amber@example.com",
        "password": hash_password("123456"),
    },
]

PRODUCTS: List[Dict[str, Any]] = [
    {
        "name": "Airpods Wireless Bluetooth Headphones",
        "image": "/images/airpods.jpg",
        "description": "Bluetooth technology lets you connect it with compatible devices wirelessly",
        "brand": "Apple",
        "category": "Electronics",
        "price": 89.99,
        "count_in_stock": 10,
        "rating": 4.5,
        "num_reviews": 12,
    },
    {
        "name": "iPhone 11 Pro 256GB Memory",
        "image": "/images/phone.jpg",
        "description": "Introducing the iPhone 11 Pro with a triple-camera system",
        "brand": "Apple",
        "category": "Electronics",
        "price": 599.99,
        "count_in_stock": 7,
        "rating": 4.0,
        "num_reviews": 8,
    },
    {
        "name": "Cannon EOS 80D DSLR Camera",
        "image": "/images/camera.jpg",
        "description": "Characterized by versatile imaging specs",
        "brand": "Cannon",
        "category": "Electronics",
        "price": 929.99,
        "count_in_stock": 5,
        "rating": 3,
        "num_reviews": 12,
    },
    {
        "name": "Sony Playstation 4 Pro White Version",
        "image": "/images/playstation.jpg",
        "description": "The ultimate home entertainment center starts with PlayStation",
        "brand": "Sony",
        "category": "Electronics",
        "price": 399.99,
        "count_in_stock": 11,
        "rating": 5,
        "num_reviews": 12,
    },
    {
        "name": "Logitech G-Series Gaming Mouse",
        "image": "/images/mouse.jpg",
        "description": "Get a better handle on your games with this Logitech LIGHTSYNC gaming mouse",
        "brand": "Logitech",
        "category": "Electronics",
        "price": 49.99,
        "count_in_stock": 7,
        "rating": 3.5,
        "num_reviews": 10,
    },
    {
        "name": "Amazon Echo Dot 3rd Generation",
        "image": "/images/alexa.jpg",
        "description": "Meet Echo Dot - Our most popular smart speaker with a fabric design",
        "brand": "Amazon",
        "category": "Electronics",
        "price": 29.99,
        "count_in_stock": 0,
        "rating": 4,
        "num_reviews": 12,
    },
]
