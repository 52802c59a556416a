import unittest

from bson import ObjectId

from tests.support import ApiTestCase


class GoalTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.patient_token = self.register("pat@example.com")
        self.provider_token = self.register("doc@example.com", role="provider")

    def add_goal(self, title="Walk 10,000 steps", token=None):
        resp = self.client.post(
            "/api/goals",
            json={"title": title, "targetDate": "2024-12-31T00:00:00Z"},
            headers=self.auth(token or self.patient_token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["goals"][-1]

    def assign(self, provider_email, patient_email):
        self.db["users"].update_one(
            {"email": provider_email},
            {"$push": {"patients": self.user_id(patient_email)}},
        )


class TestPatientGoals(GoalTestCase):
    def test_new_goal_is_pending(self):
        goal = self.add_goal()
        resp = self.client.get("/api/goals", headers=self.auth(self.patient_token))
        self.assertEqual(resp.status_code, 200)
        goals = resp.json()["goals"]
        self.assertEqual(len(goals), 1)
        self.assertEqual(goals[0]["_id"], goal["_id"])
        self.assertEqual(goals[0]["status"], "Pending")
        self.assertEqual(goals[0]["progress"], "0%")
        self.assertEqual(goals[0]["title"], "Walk 10,000 steps")

    def test_goal_ids_are_distinct(self):
        first = self.add_goal("One")
        second = self.add_goal("Two")
        self.assertNotEqual(first["_id"], second["_id"])

    def test_provider_cannot_add_goal(self):
        for body in ({}, {"title": "x"}, {"title": "x", "targetDate": "2024-12-31T00:00:00Z"}):
            resp = self.client.post("/api/goals", json=body, headers=self.auth(self.provider_token))
            self.assertEqual(resp.status_code, 403)

        for content in (b"{not json", b"[1, 2]", b"null"):
            resp = self.client.post(
                "/api/goals",
                content=content,
                headers={**self.auth(self.provider_token), "Content-Type": "application/json"},
            )
            self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.db["users"].find_one({"email": "pat@example.com"})["goals"], [])

    def test_missing_fields(self):
        resp = self.client.post(
            "/api/goals",
            json={"title": "No date"},
            headers=self.auth(self.patient_token),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Title and target date are required")

    def test_patient_not_found(self):
        self.db["users"].delete_one({"email": "pat@example.com"})
        resp = self.client.post(
            "/api/goals",
            json={"title": "x", "targetDate": "2024-12-31T00:00:00Z"},
            headers=self.auth(self.patient_token),
        )
        self.assertEqual(resp.status_code, 404)

    def test_edit_goal(self):
        goal = self.add_goal()
        resp = self.client.put(
            f"/api/goals/{goal['_id']}",
            json={"progress": "50%", "title": "Walk 12,000 steps"},
            headers=self.auth(self.patient_token),
        )
        self.assertEqual(resp.status_code, 200)
        edited = resp.json()["goal"]
        self.assertEqual(edited["progress"], "50%")
        self.assertEqual(edited["title"], "Walk 12,000 steps")
        self.assertEqual(edited["status"], "Pending")

        stored = self.db["users"].find_one({"email": "pat@example.com"})["goals"][0]
        self.assertEqual(stored["progress"], "50%")

    def test_edit_unknown_goal(self):
        self.add_goal()
        resp = self.client.put(
            f"/api/goals/{ObjectId()}",
            json={"progress": "50%"},
            headers=self.auth(self.patient_token),
        )
        self.assertEqual(resp.status_code, 404)

    def test_malformed_body_from_patient(self):
        resp = self.client.post(
            "/api/goals",
            content=b"{not json",
            headers={**self.auth(self.patient_token), "Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)

    def test_edit_with_empty_body_changes_nothing(self):
        goal = self.add_goal()
        resp = self.client.put(f"/api/goals/{goal['_id']}", headers=self.auth(self.patient_token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["goal"], goal)

    def test_target_date_renders_the_same_on_write_and_read(self):
        goal = self.add_goal()
        self.assertEqual(goal["targetDate"], "2024-12-31T00:00:00")

        resp = self.client.put(
            f"/api/goals/{goal['_id']}",
            json={"targetDate": "2025-01-01T02:00:00+02:00"},
            headers=self.auth(self.patient_token),
        )
        written = resp.json()["goal"]["targetDate"]
        self.assertEqual(written, "2025-01-01T00:00:00")

        listed = self.client.get("/api/goals", headers=self.auth(self.patient_token)).json()["goals"]
        self.assertEqual(listed[0]["targetDate"], written)

    def test_provider_cannot_list_own_goals(self):
        resp = self.client.get("/api/goals", headers=self.auth(self.provider_token))
        self.assertEqual(resp.status_code, 403)


class TestProviderGoals(GoalTestCase):
    def test_provider_sees_only_assigned_patients(self):
        self.register("other@example.com")
        other_token = self.token_for("other@example.com")
        self.add_goal("Mine")
        self.add_goal("Not yours", token=other_token)
        self.assign("doc@example.com", "pat@example.com")

        resp = self.client.get("/api/goals/patients", headers=self.auth(self.provider_token))
        self.assertEqual(resp.status_code, 200)
        patient_goals = resp.json()["patientGoals"]
        self.assertEqual(len(patient_goals), 1)
        self.assertEqual(patient_goals[0]["patientId"], str(self.user_id("pat@example.com")))
        self.assertEqual([g["title"] for g in patient_goals[0]["goals"]], ["Mine"])

    def test_patients_listed_in_assignment_order(self):
        self.register("second@example.com")
        self.add_goal("First goal")
        self.add_goal("Second goal", token=self.token_for("second@example.com"))
        self.assign("doc@example.com", "second@example.com")
        self.assign("doc@example.com", "pat@example.com")

        resp = self.client.get("/api/goals/patients", headers=self.auth(self.provider_token))
        patient_goals = resp.json()["patientGoals"]
        self.assertEqual(
            [p["patientId"] for p in patient_goals],
            [str(self.user_id("second@example.com")), str(self.user_id("pat@example.com"))],
        )
        self.assertEqual(patient_goals[0]["goals"][0]["title"], "Second goal")

    def test_dangling_and_non_patient_references_are_skipped(self):
        self.register("doc2@example.com", role="provider")
        self.db["users"].update_one(
            {"email": "doc@example.com"},
            {"$push": {"patients": {"$each": [ObjectId(), self.user_id("doc2@example.com")]}}},
        )
        self.assign("doc@example.com", "pat@example.com")

        resp = self.client.get("/api/goals/patients", headers=self.auth(self.provider_token))
        patient_goals = resp.json()["patientGoals"]
        self.assertEqual(len(patient_goals), 1)
        self.assertEqual(patient_goals[0]["patientId"], str(self.user_id("pat@example.com")))

    def test_provider_with_no_patients(self):
        resp = self.client.get("/api/goals/patients", headers=self.auth(self.provider_token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["patientGoals"], [])

    def test_patient_cannot_list_patient_goals(self):
        resp = self.client.get("/api/goals/patients", headers=self.auth(self.patient_token))
        self.assertEqual(resp.status_code, 403)

    def test_set_status(self):
        goal = self.add_goal()
        self.assign("doc@example.com", "pat@example.com")
        patient_id = self.user_id("pat@example.com")

        resp = self.client.put(
            f"/api/goals/patient/{patient_id}/{goal['_id']}",
            json={"status": "Completed"},
            headers=self.auth(self.provider_token),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["goal"]["status"], "Completed")
        stored = self.db["users"].find_one({"_id": patient_id})["goals"][0]
        self.assertEqual(stored["status"], "Completed")

    def test_invalid_status_leaves_goal_unchanged(self):
        goal = self.add_goal()
        self.assign("doc@example.com", "pat@example.com")
        patient_id = self.user_id("pat@example.com")

        for status in ("Done", "pending", "", None):
            resp = self.client.put(
                f"/api/goals/patient/{patient_id}/{goal['_id']}",
                json={"status": status},
                headers=self.auth(self.provider_token),
            )
            self.assertEqual(resp.status_code, 400)

        stored = self.db["users"].find_one({"_id": patient_id})["goals"][0]
        self.assertEqual(stored["status"], "Pending")

    def test_unassigned_patient_is_forbidden(self):
        goal = self.add_goal()
        patient_id = self.user_id("pat@example.com")
        resp = self.client.put(
            f"/api/goals/patient/{patient_id}/{goal['_id']}",
            json={"status": "Missed"},
            headers=self.auth(self.provider_token),
        )
        self.assertEqual(resp.status_code, 403)

    def test_unknown_patient_or_goal(self):
        self.add_goal()
        self.assign("doc@example.com", "pat@example.com")
        patient_id = self.user_id("pat@example.com")

        resp = self.client.put(
            f"/api/goals/patient/{ObjectId()}/{ObjectId()}",
            json={"status": "Missed"},
            headers=self.auth(self.provider_token),
        )
        self.assertEqual(resp.status_code, 404)

        resp = self.client.put(
            f"/api/goals/patient/{patient_id}/{ObjectId()}",
            json={"status": "Missed"},
            headers=self.auth(self.provider_token),
        )
        self.assertEqual(resp.status_code, 404)

    def test_patient_cannot_set_status(self):
        goal = self.add_goal()
        patient_id = self.user_id("pat@example.com")
        resp = self.client.put(
            f"/api/goals/patient/{patient_id}/{goal['_id']}",
            json={"status": "Completed"},
            headers=self.auth(self.patient_token),
        )
        self.assertEqual(resp.status_code, 403)


if __name__ == '__main__':
    unittest.main()
