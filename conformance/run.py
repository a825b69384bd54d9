#!/usr/bin/env python3
"""
canonjson Conformance Test Suite
Tests canonical JSON output, sha256 digests of it, and blake3
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from canonjson import canonicalize, canonicalize_bytes, hash, sha256

VECTORS_PATH = Path(__file__).parent / 'vectors.json'


def load_vectors(path=VECTORS_PATH):
    with open(path, encoding='utf-8') as f:
        return json.load(f)


def check_canonical(fixtures):
    """Return (passed, failures) for canonical_json_fixtures."""
    passed = 0
    failures = []

    for v in fixtures:
        try:
            result = canonicalize(v['input'])
            digest = sha256(canonicalize_bytes(v['input']))
        except ValueError as err:
            failures.append(f"CJ-{v['id']}: {err}")
            continue
        if result != v['canonical']:
            failures.append(f"CJ-{v['id']}: expected={v['canonical']}, got={result}")
        elif digest != v['sha256']:
            failures.append(f"CJ-{v['id']}: expected sha256={v['sha256']}, got={digest}")
        else:
            passed += 1

    return passed, failures


def check_blake3(fixtures):
    """Return (passed, failures) for blake3_hash_fixtures."""
    passed = 0
    failures = []

    for v in fixtures:
        result = hash(v['input'].encode('utf-8'))
        if result == v['blake3_hash']:
            passed += 1
        else:
            failures.append(f"BLAKE3-{v['id']}: expected={v['blake3_hash']}, got={result}")

    return passed, failures


def main():
    vectors = load_vectors()
    failed = 0

    suites = [
        ('canonical_json', check_canonical, vectors.get('canonical_json_fixtures', [])),
        ('blake3', check_blake3, vectors.get('blake3_hash_fixtures', [])),
    ]
    for name, check, fixtures in suites:
        print(f'[conformance] Testing {name}...')
        passed, failures = check(fixtures)
        for failure in failures:
            print(f'  [FAIL] {failure}', file=sys.stderr)
        print(f'[conformance] {name}: {passed}/{passed + len(failures)} PASS')
        failed += len(failures)

    print('')
    if failed == 0:
        print('CONFORMANCE: PASS')
        sys.exit(0)
    else:
        print('CONFORMANCE: FAIL')
        sys.exit(1)


if __name__ == '__main__':
    main()
