from catalog.application.commit_plan import CommitPlan
from catalog.domain.repository.operations import Insert, Update


class TestCommitPlan:

    def test_add_ignores_none(self):
        plan = CommitPlan()
        plan.add(None)
        assert plan.is_empty()
        assert len(plan) == 0

    def test_add_all_keeps_order_and_skips_none(self):
        first = Insert("products", {"product_id": "p-1"})
        second = Update("products", "p-1", {"name": "x"})
        plan = CommitPlan()

        plan.add_all(first, None, second)

        assert plan.operations == [first, second]
        assert plan.count() == 2

    def test_operations_is_a_copy(self):
        plan = CommitPlan()
        plan.add(Insert("products", {"product_id": "p-1"}))
        plan.operations.clear()
        assert plan.count() == 1
