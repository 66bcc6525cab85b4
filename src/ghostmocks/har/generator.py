"""Playwright test spec generator.

Renders a TypeScript test that intercepts requests to an endpoint and
fulfils them from the endpoint's JSON fixture.
"""

from __future__ import annotations

import re
from pathlib import Path
from textwrap import dedent

from ghostmocks.har.writer import write_text_file
from ghostmocks.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_APP_URL = "http://localhost:4200"
DEFAULT_LIST_SELECTOR = "li"
DEFAULT_WAIT_TIMEOUT_MS = 5000

TEST_SPEC_SUFFIX = ".spec.ts"

_TEMPLATE = dedent("""
    /**
     * Generated Playwright Test for /{endpoint}
     *
     * This test demonstrates network interception with fixtures:
     * 1. Loads the generated JSON fixture
     * 2. Intercepts network requests to /{endpoint}
     * 3. Fulfills the request with mock data instead of hitting the real API
     * 4. Verifies the UI renders the mocked data correctly
     */

    import { test, expect } from '@playwright/test';
    import * as fs from 'fs';
    import * as path from 'path';

    test.describe('{endpoint} API', () => {
      test('should display {endpoint} from fixture', async ({ page }) => {
        // Load the generated fixture
        const fixtureData = JSON.parse(
          fs.readFileSync(
            path.join(__dirname, '{fixture_path}'),
            'utf-8'
          )
        );

        // Intercept network requests to /{endpoint}
        await page.route('**/{endpoint}', async route => {
          console.log('Intercepted request to /{endpoint}');

          await route.fulfill({
            status: 200,
            contentType: 'application/json',
            body: JSON.stringify(fixtureData)
          });
        });

        await page.goto('{app_url}');

        // Wait for the list to be rendered
        // Adjust these selectors based on your actual app structure
        await page.waitForSelector('{selector}', { timeout: {timeout} });

        const items = await page.locator('{selector}').count();
        expect(items).toBeGreaterThan(0);
        console.log(`Found ${items} items rendered`);

        // If the fixture is an array, verify count matches
        if (Array.isArray(fixtureData)) {
          expect(items).toBe(fixtureData.length);

          // Verify first item name is visible (adjust based on your data structure)
          if (fixtureData[0]?.name) {
            await expect(page.getByText(fixtureData[0].name)).toBeVisible();
            console.log(`Verified first item: ${fixtureData[0].name}`);
          }
        }
      });

      test('should handle empty state', async ({ page }) => {
        await page.route('**/{endpoint}', async route => {
          await route.fulfill({
            status: 200,
            contentType: 'application/json',
            body: JSON.stringify([])
          });
        });

        await page.goto('{app_url}');

        // Add assertions for empty state UI
        // Example: await expect(page.getByText('No items found')).toBeVisible();
      });
    });
""").lstrip()

_PLACEHOLDER = re.compile(r"\{(endpoint|fixture_path|app_url|selector|timeout)\}")


def _ts_string(value: str) -> str:
    """Escape a value for a single-quoted TypeScript literal or a block comment."""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("*/", "*\\/")
    )


def render_test_spec(
    endpoint: str,
    fixture_relative_path: str,
    *,
    app_url: str = DEFAULT_APP_URL,
    list_selector: str = DEFAULT_LIST_SELECTOR,
    wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
) -> str:
    """Render the Playwright test source for one endpoint.

    Placeholders are filled in a single pass, so a value that happens to
    contain ``{endpoint}`` or similar text is written out literally.

    Args:
        endpoint: URL path segment, used in the route pattern and labels.
        fixture_relative_path: Path from the test file's directory to the fixture.
        app_url: Page the tests navigate to.
        list_selector: Selector for one rendered list item.
        wait_timeout_ms: Timeout for the list to appear.

    Returns:
        TypeScript source code.
    """
    values = {
        "endpoint": _ts_string(endpoint),
        "fixture_path": _ts_string(fixture_relative_path),
        "app_url": _ts_string(app_url),
        "selector": _ts_string(list_selector),
        "timeout": str(int(wait_timeout_ms)),
    }
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], _TEMPLATE)


def generate_test_spec(
    endpoint: str,
    fixture_relative_path: str,
    output_path: Path,
    *,
    app_url: str = DEFAULT_APP_URL,
    list_selector: str = DEFAULT_LIST_SELECTOR,
    wait_timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS,
) -> Path:
    """Render the test spec for an endpoint and write it to output_path.

    Raises:
        FixtureWriteError: If the file cannot be written.
    """
    code = render_test_spec(
        endpoint,
        fixture_relative_path,
        app_url=app_url,
        list_selector=list_selector,
        wait_timeout_ms=wait_timeout_ms,
    )
    write_text_file(output_path, code)

    LOG.info(
        "test_spec_generated",
        endpoint=endpoint,
        path=str(output_path),
        fixture=fixture_relative_path,
    )
    return output_path
