from apicase import ApiTestCase

from budgetapp.extensions import db
from budgetapp.models import Expense, Tab


class TabApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        _, self.alice = self.signup("alice@example.com")
        _, self.bob = self.signup("bob@example.com")
        self.budget = self.create_budget(self.alice, name="Household")
        self.url = f"/api/budgets/{self.budget['id']}/tabs"

    def test_create_tab(self):
        tab = self.create_tab(
            self.alice, self.budget["id"], " Food ", description="Groceries", amount_allocated="250.5", color="#FF5733",
        )
        self.assertEqual(tab["name"], "Food")
        self.assertEqual(tab["amount_allocated"], 250.5)
        self.assertEqual(tab["color"], "#FF5733")
        self.assertEqual(tab["position"], 0)
        self.assertEqual(tab["budget_id"], self.budget["id"])

    def test_amount_allocated_defaults_to_zero(self):
        tab = self.create_tab(self.alice, self.budget["id"], "Misc")
        self.assertEqual(tab["amount_allocated"], 0.0)

    def test_amount_allocated_rejects_negative_and_non_numbers(self):
        for value in (-1, "-0.01", "abc", True, [5]):
            resp = self.client.post(self.url, json={"name": "Food", "amount_allocated": value}, headers=self.alice)
            self.assertEqual(resp.status_code, 400, value)
            self.assertEqual(resp.get_json()["field"], "amount_allocated")

    def test_name_required(self):
        resp = self.client.post(self.url, json={"name": "  "}, headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["field"], "name")

    def test_duplicate_name_in_same_budget_conflicts(self):
        self.create_tab(self.alice, self.budget["id"], "Food")
        resp = self.client.post(self.url, json={"name": "Food"}, headers=self.alice)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.get_json()["message"], "A tab with this name already exists in this budget")

    def test_same_name_in_other_budget_is_allowed(self):
        other = self.create_budget(self.alice, name="Trip")
        self.create_tab(self.alice, self.budget["id"], "Food")
        tab = self.create_tab(self.alice, other["id"], "Food")
        self.assertEqual(tab["budget_id"], other["id"])

    def test_position_defaults_to_next_slot(self):
        self.create_tab(self.alice, self.budget["id"], "Rent", position=0)
        self.create_tab(self.alice, self.budget["id"], "Food", position=1)
        tab = self.create_tab(self.alice, self.budget["id"], "Fun")
        self.assertEqual(tab["position"], 2)

    def test_list_tabs_ordered_by_position(self):
        self.create_tab(self.alice, self.budget["id"], "Third", position=5)
        self.create_tab(self.alice, self.budget["id"], "First", position=0)
        self.create_tab(self.alice, self.budget["id"], "Second", position=2)
        resp = self.client.get(self.url, headers=self.alice)
        self.assertEqual([t["name"] for t in resp.get_json()["tabs"]], ["First", "Second", "Third"])

    def test_update_tab(self):
        tab = self.create_tab(self.alice, self.budget["id"], "Food", amount_allocated=100)
        resp = self.client.put(
            f"{self.url}/{tab['id']}",
            json={"name": "Groceries", "amount_allocated": 150, "position": "3", "color": ""},
            headers=self.alice,
        )
        self.assertEqual(resp.status_code, 200)
        updated = resp.get_json()["tab"]
        self.assertEqual(updated["name"], "Groceries")
        self.assertEqual(updated["amount_allocated"], 150.0)
        self.assertEqual(updated["position"], 3)
        self.assertIsNone(updated["color"])

    def test_rename_checks_uniqueness_excluding_self(self):
        food = self.create_tab(self.alice, self.budget["id"], "Food")
        self.create_tab(self.alice, self.budget["id"], "Rent")

        resp = self.client.put(f"{self.url}/{food['id']}", json={"name": "Food"}, headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.put(f"{self.url}/{food['id']}", json={"name": "Rent"}, headers=self.alice)
        self.assertEqual(resp.status_code, 409)

    def test_update_validation(self):
        tab = self.create_tab(self.alice, self.budget["id"], "Food")
        url = f"{self.url}/{tab['id']}"
        self.assertEqual(self.client.put(url, json={}, headers=self.alice).status_code, 400)
        self.assertEqual(self.client.put(url, json={"amount_allocated": -5}, headers=self.alice).status_code, 400)
        self.assertEqual(self.client.put(url, json={"position": "first"}, headers=self.alice).status_code, 400)
        self.assertEqual(self.client.put(url, json={"name": ""}, headers=self.alice).status_code, 400)

    def test_position_must_fit_the_column(self):
        resp = self.client.post(self.url, json={"name": "Big", "position": 10 ** 20}, headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["field"], "position")
        tab = self.create_tab(self.alice, self.budget["id"], "Food", position=2 ** 31 - 1)
        resp = self.client.put(f"{self.url}/{tab['id']}", json={"position": -(2 ** 31) - 1}, headers=self.alice)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["field"], "position")

    def test_delete_tab_cascades_expenses(self):
        food = self.create_tab(self.alice, self.budget["id"], "Food", amount_allocated=100)
        rent = self.create_tab(self.alice, self.budget["id"], "Rent", amount_allocated=900)
        self.log_expense(self.alice, self.budget["id"], food["id"], 20)
        kept = self.log_expense(self.alice, self.budget["id"], rent["id"], 900)

        resp = self.client.delete(f"{self.url}/{food['id']}", headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(db.session.get(Tab, food["id"]))
        self.assertEqual([e.id for e in Expense.query.filter_by(budget_id=self.budget["id"])], [kept["id"]])

    def test_tabs_of_other_users_budget_are_not_found(self):
        tab = self.create_tab(self.alice, self.budget["id"], "Food")
        self.assertEqual(self.client.get(self.url, headers=self.bob).status_code, 404)
        self.assertEqual(self.client.post(self.url, json={"name": "Mine"}, headers=self.bob).status_code, 404)
        resp = self.client.put(f"{self.url}/{tab['id']}", json={"name": "Mine"}, headers=self.bob)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self.client.delete(f"{self.url}/{tab['id']}", headers=self.bob).status_code, 404)
        self.assertEqual(db.session.get(Tab, tab["id"]).name, "Food")

    def test_tab_addressed_through_wrong_budget_is_not_found(self):
        other = self.create_budget(self.alice, name="Trip")
        tab = self.create_tab(self.alice, self.budget["id"], "Food")
        resp = self.client.put(f"/api/budgets/{other['id']}/tabs/{tab['id']}", json={"name": "X"}, headers=self.alice)
        self.assertEqual(resp.status_code, 404)
