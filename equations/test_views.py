import time
from unittest import mock

import sympy as sp
from django.test import SimpleTestCase, override_settings
from rest_framework.test import APIClient

URL = '/api/field-equations/'

MINKOWSKI = [
    ["-1", "0", "0", "0"],
    ["0", "1", "0", "0"],
    ["0", "0", "1", "0"],
    ["0", "0", "0", "1"],
]
ZEROS = [["0"] * 4 for _ in range(4)]


def minkowski_payload(**overrides):
    payload = {
        "coordinates": ["t", "x", "y", "z"],
        "omega": 0,
        "metric": MINKOWSKI,
        "energy_momentum": ZEROS,
        "scalar_field": "1",
        "potential": "0",
    }
    payload.update(overrides)
    return payload


class FieldEquationViewSetTests(SimpleTestCase):

    def setUp(self):
        self.client = APIClient()

    def post(self, payload, url=URL):
        return self.client.post(url, payload, format='json')

    def test_minkowski_gives_zero_tensor(self):
        response = self.post(minkowski_payload())
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['latex'], sp.latex(sp.zeros(4, 4)))
        self.assertEqual(data['components'], [r"G_{\mu\nu} = 0"])
        self.assertEqual(data['einsteinTensor'], [["0"] * 4 for _ in range(4)])
        self.assertEqual(data['derived']['boxPhi'], "0")

    def test_frontend_style_payload(self):
        payload = {
            "coordinates": "t,x,y,z",
            "omega": "1",
            "metric": MINKOWSKI,
            "energyMomentum": ZEROS,
            "phi": "t",
            "potential": "phi**2",
            "evaluationPoint": [1, 0, 0, 0],
        }
        response = self.post(payload)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['coordinates'], ["t", "x", "y", "z"])
        self.assertEqual(data['evaluationPoint'], [1.0, 0.0, 0.0, 0.0])
        self.assertEqual(len(data['evaluatedTensor']), 4)

    def test_identical_requests_identical_output(self):
        payload = minkowski_payload(scalar_field="t**2 + x", potential="m*phi**2", omega="w")
        first = self.post(payload).json()
        second = self.post(payload).json()
        self.assertEqual(first['latex'], second['latex'])

    def test_missing_field(self):
        payload = minkowski_payload()
        del payload['metric']
        response = self.post(payload)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errorType'], 'ValidationError')
        self.assertIn('metric', response.json()['details'])

    def test_parse_error(self):
        response = self.post(minkowski_payload(potential="**"))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errorType'], 'ParseError')

    def test_shape_error(self):
        response = self.post(minkowski_payload(coordinates=["t", "x"]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errorType'], 'ShapeError')

    def test_singular_metric(self):
        metric = [row[:] for row in MINKOWSKI]
        metric[3] = ["0", "0", "0", "0"]
        response = self.post(minkowski_payload(metric=metric))
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()['errorType'], 'AlgebraicError')

    def test_division_by_zero(self):
        response = self.post(minkowski_payload(potential="1/0"))
        self.assertEqual(response.status_code, 422)

    def test_too_many_coordinates(self):
        response = self.post(minkowski_payload(coordinates=[f"x{i}" for i in range(20)]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errorType'], 'ValidationError')

    def test_huge_power_is_refused_quickly(self):
        started = time.monotonic()
        response = self.post(minkowski_payload(potential="9**9**9"))
        self.assertLess(time.monotonic() - started, 10)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errorType'], 'ParseError')

    @override_settings(FIELD_EQUATIONS_SYNC_TIME_LIMIT=0.01)
    def test_slow_evaluation_times_out(self):
        metric = [
            ["-A(t, r)", "0", "0", "0"],
            ["0", "B(t, r)", "0", "0"],
            ["0", "0", "r**2", "0"],
            ["0", "0", "0", "r**2*sin(theta)**2"],
        ]
        payload = minkowski_payload(
            coordinates=["t", "r", "theta", "p"],
            omega="w",
            metric=metric,
            energy_momentum=[["rho(t, r)", "0", "0", "0"],
                             ["0", "P(t, r)", "0", "0"],
                             ["0", "0", "P(t, r)*r**2", "0"],
                             ["0", "0", "0", "P(t, r)*r**2*sin(theta)**2"]],
            scalar_field="f(t, r)",
            potential="m**2*phi**2 + l*phi**4",
            simplify=True,
        )
        started = time.monotonic()
        response = self.post(payload)
        self.assertLess(time.monotonic() - started, 10)
        self.assertEqual(response.status_code, 504)
        self.assertEqual(response.json()['errorType'], 'EvaluationTimeout')

    @mock.patch('equations.views.field_equations_viewset.compute_within_time_limit')
    def test_unexpected_error(self, compute):
        compute.side_effect = RuntimeError("boom")
        response = self.post(minkowski_payload())
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['errorType'], 'InternalError')

    def test_submit_runs_task(self):
        response = self.post(minkowski_payload(), url=URL + 'submit/')
        self.assertEqual(response.status_code, 202)
        data = response.json()
        self.assertTrue(data['task_id'])
        self.assertEqual(data['status'], 'SUCCESS')

    def test_submit_validates_input(self):
        response = self.post({"coordinates": ["t"]}, url=URL + 'submit/')
        self.assertEqual(response.status_code, 400)

    def test_theory(self):
        response = self.client.get(URL + 'theory/')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertIn(r"\Box\phi", data['boxPhi'])
        self.assertIn('action', data)


class TaskStatusTests(SimpleTestCase):

    def setUp(self):
        self.client = APIClient()

    @mock.patch('equations.views.views.AsyncResult')
    def test_finished_task(self, async_result):
        async_result.return_value.status = 'SUCCESS'
        async_result.return_value.successful.return_value = True
        async_result.return_value.result = {'success': True, 'latex': '0'}
        response = self.client.get('/api/tasks/abc/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'task_id': 'abc',
            'status': 'SUCCESS',
            'result': {'success': True, 'latex': '0'},
        })

    @mock.patch('equations.views.views.AsyncResult')
    def test_pending_task(self, async_result):
        async_result.return_value.status = 'PENDING'
        async_result.return_value.successful.return_value = False
        async_result.return_value.failed.return_value = False
        response = self.client.get('/api/tasks/abc/')
        self.assertEqual(response.json(), {'task_id': 'abc', 'status': 'PENDING'})


class HealthCheckTests(SimpleTestCase):

    def test_health(self):
        response = self.client.get('/api/health/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')
