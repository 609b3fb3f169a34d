import unittest
from dataclasses import FrozenInstanceError

from deal_engine import DealInputs, build_deal_inputs, compute_deal


class TestDealRepro(unittest.TestCase):
    def get_hvac_inputs(self):
        return DealInputs(
            asking_price=2_500_000,
            annual_revenue=3_000_000,
            ebitda=450_000,
            owner_salary=150_000,
            recurring_revenue=900_000,
            top_customer_revenue=300_000,
            years_in_business=15,
            down_payment_pct=5,
            seller_note_pct=5,
            interest_rate_pct=10,
            loan_term_years=10,
            industry="services",
        )

    def test_hvac_services_financing(self):
        """
        $2.5M HVAC business, 5% down, 5% seller note, 10-year term.
        The form's "10.5" rate is read as 10 whole percentage points.
        """
        metrics, _ = compute_deal(self.get_hvac_inputs())
        financing = metrics.financing

        self.assertEqual(financing.down_payment, 125_000.0)
        self.assertEqual(financing.seller_note_amount, 125_000.0)
        self.assertEqual(financing.bank_loan_amount, 2_250_000.0)

        # Monthly bank payment at 10% / 120 payments
        self.assertAlmostEqual(financing.bank_debt_service / 12, 29733.9158, places=3)
        self.assertAlmostEqual(financing.seller_debt_service, 19822.6105, places=3)
        self.assertAlmostEqual(metrics.total_debt_service, 376629.6001, places=3)

    def test_hvac_services_metrics(self):
        metrics, _ = compute_deal(self.get_hvac_inputs())

        self.assertAlmostEqual(metrics.ebitda_multiple, 2_500_000 / 450_000)
        self.assertAlmostEqual(round(metrics.ebitda_multiple, 2), 5.56)
        self.assertAlmostEqual(metrics.revenue_multiple, 2_500_000 / 3_000_000)
        self.assertAlmostEqual(metrics.price_to_earnings, 7.936508, places=5)
        self.assertAlmostEqual(metrics.debt_service_coverage_ratio, 1.194808, places=5)
        self.assertAlmostEqual(metrics.return_on_investment, 18.0)
        self.assertAlmostEqual(metrics.payback_period, 5.555556, places=5)
        self.assertEqual(metrics.working_capital_ratio, 0.0)

        # Raw dollar magnitudes saturate the heuristic scores.
        self.assertEqual(metrics.risk_score, 0.0)
        self.assertAlmostEqual(metrics.growth_potential, 630_000.0)
        self.assertEqual(metrics.market_position_score, 10.0)
        self.assertEqual(metrics.competitive_threat, 100.0)

    def test_hvac_services_cash_flows(self):
        metrics, _ = compute_deal(self.get_hvac_inputs())

        self.assertEqual(
            metrics.projected_cash_flows,
            (-125_000.0, -9_130.0, 52_970.0, 110_930.0, 161_935.0, 203_249.0),
        )
        self.assertAlmostEqual(metrics.net_present_value, 173689.6114, places=3)
        self.assertAlmostEqual(metrics.internal_rate_of_return, 83.19264, places=6)

    def test_hvac_services_recommendation(self):
        _, analysis = compute_deal(self.get_hvac_inputs())

        self.assertEqual(analysis.recommendation, "Neutral")
        self.assertEqual(analysis.color, "text-yellow-500")
        self.assertEqual(analysis.score, 57.0)
        self.assertEqual(
            analysis.strengths,
            (
                "High recurring revenue (30%)",
                "Well-diversified customer base",
                "Established business (15 years operating)",
            ),
        )
        self.assertEqual(
            analysis.weaknesses,
            (
                "Technology systems could be modernized",
                "Marketing strategy needs enhancement",
                "Tight debt coverage (1.19x DSCR)",
                "Seasonal revenue fluctuations",
            ),
        )
        self.assertEqual(
            analysis.opportunities,
            ("Growing demand for HVAC services", "Energy efficiency upgrade opportunities"),
        )
        self.assertEqual(analysis.threats, ("Labor market challenges", "Equipment supply chain risks"))

    def test_form_values_match_typed_inputs(self):
        form = {
            "askingPrice": "2,500,000",
            "revenue": "3,000,000",
            "ebitda": "450,000",
            "ownerSalary": "150,000",
            "recurringRevenue": "900,000",
            "topCustomerRevenue": "300,000",
            "yearsInBusiness": "15",
            "downPayment": "5",
            "sellerNote": "5",
            "interestRate": "10.5",
            "loanTerm": "10",
            "industry": "services",
        }
        self.assertEqual(build_deal_inputs(form), self.get_hvac_inputs())

    def test_results_are_immutable(self):
        metrics, analysis = compute_deal(self.get_hvac_inputs())

        with self.assertRaises(AttributeError):
            metrics.projected_cash_flows.append(0.0)
        with self.assertRaises(AttributeError):
            analysis.strengths.append("Extra")
        with self.assertRaises(FrozenInstanceError):
            analysis.score = 100.0

    def test_repeat_runs_are_identical(self):
        inputs = self.get_hvac_inputs()
        self.assertEqual(compute_deal(inputs), compute_deal(inputs))


if __name__ == "__main__":
    unittest.main()
