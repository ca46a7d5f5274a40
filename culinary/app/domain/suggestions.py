# culinary/app/domain/suggestions.py
"""Static content for the idle search screen."""
from __future__ import annotations

COMMON_INGREDIENTS = [
    "Chicken Breast", "Ground Beef", "Rice", "Pasta", "Eggs", "Milk", "Flour", "Butter", "Cheese", "Onion", "Garlic",
    "Tomato", "Potato", "Carrot", "Spinach", "Broccoli", "Salmon", "Tuna", "Avocado", "Bread", "Olive Oil", "Lemon",
    "Mushrooms", "Bell Pepper", "Zucchini", "Yogurt", "Heavy Cream", "Bacon", "Shrimp", "Tofu", "Soy Sauce", "Honey",
]

RECOMMENDED_DISHES = [
    {
        "name": "Avocado Toast with Egg",
        "image": "https://images.unsplash.com/photo-1525351484163-7529414395d8?auto=format&fit=crop&w=600&q=80",
    },
    {
        "name": "Classic Beef Burger",
        "image": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?auto=format&fit=crop&w=600&q=80",
    },
    {
        "name": "Blueberry Pancakes",
        "image": "https://images.unsplash.com/photo-1528207776546-365bb710ee93?auto=format&fit=crop&w=600&q=80",
    },
    {
        "name": "Grilled Salmon Salad",
        "image": "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?auto=format&fit=crop&w=600&q=80",
    },
]
