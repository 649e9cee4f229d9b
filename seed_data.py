"""Seed script to populate the store with sample data."""

from datetime import datetime
from poppes import create_app
from poppes.records import ProductRecord
from poppes.repositories import get_store

SAMPLE_PRODUCTS = [
    {
        'name': 'Pure A2 Cow Ghee',
        'description': 'Premium quality A2 cow ghee made from grass-fed cows. Rich in nutrients and perfect for cooking, religious ceremonies, and Ayurvedic treatments. Made using traditional bilona method.',
        'price': '899',
        'image': 'https://images.pexels.com/photos/6544373/pexels-photo-6544373.jpeg?auto=compress&cs=tinysrgb&w=800',
        'quantity': 25,
        'unit': '500 grams',
        'in_stock': True,
        'category': 'Dairy',
        'created_at': datetime(2024, 1, 15),
    },
    {
        'name': 'Raw Forest Honey',
        'description': 'Unprocessed, raw honey sourced directly from forest hives. Contains natural enzymes, antioxidants, and minerals. Perfect for boosting immunity and natural sweetening.',
        'price': '649',
        'image': 'https://images.pexels.com/photos/1640777/pexels-photo-1640777.jpeg?auto=compress&cs=tinysrgb&w=800',
        'quantity': 30,
        'unit': '500 grams',
        'in_stock': True,
        'category': 'Honey',
        'created_at': datetime(2024, 1, 20),
    },
    {
        'name': 'Organic Turmeric Powder',
        'description': 'Pure organic turmeric powder with high curcumin content. Naturally grown without any chemicals or pesticides. Great for cooking and health benefits.',
        'price': '299',
        'image': 'https://images.pexels.com/photos/161556/spice-turmeric-cooking-ingredient-161556.jpeg?auto=compress&cs=tinysrgb&w=800',
        'quantity': 0,
        'unit': '250 grams',
        'in_stock': False,
        'category': 'Spices',
        'created_at': datetime(2024, 1, 25),
    },
    {
        'name': 'Cold Pressed Coconut Oil',
        'description': 'Virgin coconut oil extracted using traditional cold-pressed method. Retains all natural nutrients and has a rich coconut aroma. Perfect for cooking and skin care.',
        'price': '450',
        'image': 'https://images.pexels.com/photos/4198543/pexels-photo-4198543.jpeg?auto=compress&cs=tinysrgb&w=800',
        'quantity': 20,
        'unit': '1 litre',
        'in_stock': True,
        'category': 'Oils',
        'created_at': datetime(2024, 2, 1),
    },
]


def seed_database(app=None):
    """Seed the store with an admin account and the sample catalogue."""
    app = app or create_app()

    with app.app_context():
        store = get_store()

        # Check if already seeded
        if store.identity.find_by_email('admin@poppes.com'):
            print('Database already seeded!')
            return False

        print('Seeding database...')

        store.identity.register('admin@poppes.com', 'admin123', 'Admin User', role='admin')

        for data in SAMPLE_PRODUCTS:
            product = ProductRecord(**data)
            store.products.create(product)
            print(f'  Added {product.name}')

        print('Done! Admin login: admin@poppes.com / admin123')
        return True


if __name__ == '__main__':
    seed_database()
