import unittest

from domain.model.user import Role, User, UserData, UserPage


class TestUserPage(unittest.TestCase):

    def test_total_pages_rounds_up(self):
        self.assertEqual(UserPage(items=[], page=1, page_size=10, total_items=21).total_pages, 3)
        self.assertEqual(UserPage(items=[], page=1, page_size=7, total_items=7).total_pages, 1)

    def test_total_pages_zero_when_empty(self):
        self.assertEqual(UserPage(items=[], page=1, page_size=10, total_items=0).total_pages, 0)


class TestUser(unittest.TestCase):

    def test_role_defaults_to_user(self):
        user = User(id='u-1', first_name='A', last_name='B', email='a@example.com')

        self.assertEqual(user.role, Role.USER)

    def test_to_data_drops_identity(self):
        user = User(id='u-1', first_name='A', last_name='B', email='a@example.com', password_hash='h', role=Role.ADMIN)

        self.assertEqual(user.to_data(), UserData('A', 'B', 'a@example.com', 'h', Role.ADMIN))

    def test_role_is_a_string(self):
        self.assertEqual(Role('ADMIN'), Role.ADMIN)
        self.assertEqual(Role.ADMIN, 'ADMIN')


if __name__ == '__main__':
    unittest.main()
