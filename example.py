"""Example usage of the expectdiff comparison engine."""

import json
from expectdiff import ExpectDiffEngine

# Sample payload: the new service started returning tax details
payload = {
    "compare_item": {
        "id": "11111111-2222-3333-4444-555555555555",
        "created_date": "2025-01-01T00:00:00.000Z",
        "expected": {
            "success": {
                "price": {
                    "currency": "USD",
                    "discount": "0",
                    "planPrice": "10.00",
                    "singlePaymentUnlimited": True,
                    "subtotal": "10.00",
                    "total": "10.00"
                },
                "prices": [
                    {
                        "duration": {"cycleFrom": 1, "numberOfCycles": 1},
                        "price": {
                            "currency": "USD",
                            "discount": "0",
                            "proration": "0",
                            "subtotal": "10.00",
                            "total": "10.00"
                        }
                    }
                ]
            }
        },
        "actual": {
            "success": {
                "price": {
                    "currency": "USD",
                    "discount": "0",
                    "freeTrialDays": 0,
                    "planPrice": "10.00",
                    "singlePaymentUnlimited": True,
                    "subtotal": "10.00",
                    "tax": {"amount": "0", "name": "TBD", "rate": "0"},
                    "total": "10.00"
                },
                "prices": [
                    {
                        "duration": {"cycleFrom": 1, "numberOfCycles": 1},
                        "price": {
                            "currency": "USD",
                            "discount": "0",
                            "proration": "0",
                            "subtotal": "10.00",
                            "tax": {"amount": "0", "name": "TBD", "rate": "0"},
                            "total": "10.00"
                        }
                    }
                ]
            }
        },
        "tag": "com.example.service.DiffExample",
        "request_id": "1234567890",
        "channel_name": "com_example_diff-tool",
        "result": {"status": "MISMATCH"},
        "tags": []
    }
}

# Channel configuration: tax details are not rolled out on the old side yet
config = {
    "channel": {
        "configuration": {
            "ignore_paths": [
                "success.price.tax",
                "success.prices[*].price.tax"
            ]
        }
    }
}


def main():
    engine = ExpectDiffEngine()

    print("=" * 60)
    print("Comparison without configuration")
    print("=" * 60)
    result = engine.analyze(json.dumps(payload))
    print(json.dumps([d.to_dict() for d in result.differences], indent=2))
    print()
    print(result.unified_diff)

    print("=" * 60)
    print("Comparison with ignore_paths")
    print("=" * 60)
    result = engine.analyze(json.dumps(payload), json.dumps(config))
    print(json.dumps(result.summary().to_dict(), indent=2))
    print(json.dumps([d.to_dict() for d in result.differences], indent=2))


if __name__ == "__main__":
    main()
