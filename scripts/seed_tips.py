from app.core.database import init_mongo
from app.models.tip import Tip

db = init_mongo()

tips = [
    {"title": "Stay Hydrated", "description": "Drink at least 8 glasses of water a day."},
    {"title": "Move Every Hour", "description": "Stand up and stretch for a few minutes every hour."},
    {"title": "Sleep Well", "description": "Aim for 7 to 9 hours of sleep each night."},
    {"title": "Eat Your Greens", "description": "Fill half your plate with vegetables at each meal."},
    {"title": "Take a Walk", "description": "A 30 minute walk most days keeps your heart healthy."},
    {"title": "Mind Your Meds", "description": "Take medications at the same time every day."},
]


def seed():
    collection = db["tips"]
    for t in tips:
        # Check if exists to avoid dupes
        if collection.find_one({"title": t["title"]}) is None:
            collection.insert_one(Tip(**t).model_dump())
            print(f"Added {t['title']}")
        else:
            print(f"Skipped {t['title']} (Exists)")


if __name__ == "__main__":
    seed()
