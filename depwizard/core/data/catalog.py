"""
Package catalog — the curated list offered in the selection prompt.

Pure data, no logic beyond validation. Raw entries are validated into
frozen PackageDescriptor models once at import; a malformed entry fails
the import instead of surfacing mid-run.

Entry fields:
    name                    (str)  npm package name, REQUIRED
    type                    (str)  "prod" | "dev", REQUIRED
    external_dependencies   (list) [{name, type}] installed alongside
    post_install_scripts    (list) shell commands run after install
    additional_logs         (list) [{title, content}] printed after install
"""

from __future__ import annotations

from textwrap import dedent

from depwizard.core.models.package import PackageDescriptor


def _ts_types(*names: str) -> dict:
    return {
        "title": "For TypeScript users",
        "content": "npm install --save-dev " + " ".join(names),
    }


_RAW_CATALOG: list[dict] = [

    # ── Routing & state ─────────────────────────────────────────

    {
        "name": "react-router-dom",
        "type": "prod",
        "additional_logs": [
            {
                "title": "Add the code below in main.jsx instead of <App />",
                "content": dedent("""\
                    Add the following lines to your main.jsx file:

                    import {
                      createBrowserRouter,
                      RouterProvider,
                    } from "react-router-dom";

                    const router = createBrowserRouter([
                      {
                        path: "/",
                        element: <div>Hello world!</div>,
                      },
                    ]);

                    <RouterProvider router={router} />"""),
            },
        ],
    },
    {
        "name": "lodash",
        "type": "prod",
        "additional_logs": [_ts_types("@types/lodash")],
    },
    {
        "name": "tailwindcss",
        "type": "dev",
        "external_dependencies": [
            {"name": "postcss", "type": "dev"},
            {"name": "autoprefixer", "type": "dev"},
        ],
        "post_install_scripts": ["npx tailwindcss init -p"],
        "additional_logs": [
            {
                "title": "Add Tailwind directives to your CSS",
                "content": dedent("""\
                    Add the following lines to your CSS file:

                    @tailwind base;
                    @tailwind components;
                    @tailwind utilities;"""),
            },
            {
                "title": "Configure your template paths",
                "content": dedent("""\
                    Add the following configuration to your tailwind.config.js file:

                    /** @type {import('tailwindcss').Config} */
                    export default {
                      content: [
                        "./index.html",
                        "./src/**/*.{js,ts,jsx,tsx}",
                      ],
                      theme: {
                        extend: {},
                      },
                      plugins: [],
                    }"""),
            },
        ],
    },
    {
        "name": "@reduxjs/toolkit",
        "type": "prod",
        "external_dependencies": [{"name": "react-redux", "type": "prod"}],
        "additional_logs": [
            {
                "title": "Add these to store.ts",
                "content": dedent("""\
                    Add the following lines to your store.ts file:

                    import { configureStore } from '@reduxjs/toolkit'

                    export const store = configureStore({
                      reducer: {},
                    })

                    // Infer the RootState and AppDispatch types from the store itself
                    export type RootState = ReturnType<typeof store.getState>
                    export type AppDispatch = typeof store.dispatch"""),
            },
            {
                "title": "Add these to main.tsx",
                "content": dedent("""\
                    Add the following lines to your main.tsx file:

                    import { store } from './app/store'
                    import { Provider } from 'react-redux'

                    <Provider store={store}>
                      <App />
                    </Provider>,"""),
            },
            {
                "title": "For Slices and reducers",
                "content": "See more here: https://redux-toolkit.js.org/tutorials/quick-start",
            },
        ],
    },

    # ── HTTP & data ─────────────────────────────────────────────

    {"name": "axios", "type": "prod"},
    {
        "name": "axios-rate-limit",
        "type": "prod",
        "additional_logs": [_ts_types("@types/axios-rate-limit")],
    },

    # ── Testing & linting ───────────────────────────────────────

    {
        "name": "jest",
        "type": "dev",
        "additional_logs": [_ts_types("@types/jest")],
    },
    {
        "name": "eslint",
        "type": "dev",
        "additional_logs": [
            _ts_types("@typescript-eslint/eslint-plugin", "@typescript-eslint/parser"),
        ],
    },

    # ── Utilities ───────────────────────────────────────────────

    {"name": "date-fns", "type": "prod"},
    {"name": "react-helmet", "type": "prod"},
    {"name": "web-vitals", "type": "dev"},
    {"name": "react-ga", "type": "prod"},
    {"name": "react-hook-form", "type": "prod"},
    {"name": "formik", "type": "prod"},
    {
        "name": "passport",
        "type": "prod",
        "additional_logs": [_ts_types("@types/passport")],
    },
    {
        "name": "uuid",
        "type": "prod",
        "additional_logs": [_ts_types("@types/uuid")],
    },
    {
        "name": "bcrypt",
        "type": "prod",
        "additional_logs": [_ts_types("@types/bcrypt")],
    },
    {"name": "prettier", "type": "dev"},
    {
        "name": "@tanstack/react-query",
        "type": "prod",
        "additional_logs": [
            {
                "title": "Add these to main.jsx",
                "content": dedent("""\
                    Add the following lines to your main.jsx file:

                    import { QueryClient, QueryClientProvider } from '@tanstack/react-query';

                    const queryClient = new QueryClient()

                    <QueryClientProvider client={queryClient}>
                      <App />
                    </QueryClientProvider>"""),
            },
        ],
    },

    # ── Styling & UI kits ───────────────────────────────────────

    {
        "name": "@emotion/react",
        "type": "prod",
        "external_dependencies": [{"name": "@emotion/styled", "type": "prod"}],
    },
    {
        "name": "styled-components",
        "type": "prod",
        "additional_logs": [_ts_types("@types/styled-components")],
    },
    {
        "name": "react-bootstrap",
        "type": "prod",
        "external_dependencies": [{"name": "bootstrap", "type": "prod"}],
        "additional_logs": [
            {
                "title": "Paste this into main.jsx",
                "content": "import 'bootstrap/dist/css/bootstrap.min.css';",
            },
            {
                "title": "If using TypeScript add this in tsconfig",
                "content": dedent("""\
                    {
                      "compilerOptions": {
                        "esModuleInterop": true
                      }
                    }"""),
            },
        ],
    },
    {
        "name": "@mui/material",
        "type": "prod",
        "external_dependencies": [
            {"name": "@emotion/react", "type": "prod"},
            {"name": "@emotion/styled", "type": "prod"},
            {"name": "@mui/icons-material", "type": "prod"},
        ],
        "additional_logs": [
            {
                "title": "Add these to App.js",
                "content": dedent("""\
                    import { ThemeProvider, createTheme } from '@mui/material/styles';
                    import CssBaseline from '@mui/material/CssBaseline';

                    const theme = createTheme();

                    <ThemeProvider theme={theme}>
                      <CssBaseline />
                      {/* Your app components */}
                    </ThemeProvider>"""),
            },
        ],
    },
    {"name": "typescript-toastify", "type": "prod"},
    {"name": "cypress", "type": "dev"},
    {
        "name": "@testing-library/react",
        "type": "dev",
        "external_dependencies": [
            {"name": "@testing-library/jest-dom", "type": "dev"},
        ],
    },

    # ── Animation & feedback ────────────────────────────────────

    {"name": "react-icons", "type": "prod"},
    {"name": "react-toastify", "type": "prod"},
    {"name": "framer-motion", "type": "prod"},
    {"name": "react-spring", "type": "prod"},
    {"name": "react-error-boundary", "type": "prod"},
    {"name": "zustand", "type": "prod"},
    {
        "name": "react-lottie",
        "type": "prod",
        "additional_logs": [_ts_types("@types/react-lottie")],
    },
    {
        "name": "react-slick",
        "type": "prod",
        "external_dependencies": [{"name": "slick-carousel", "type": "prod"}],
        "additional_logs": [
            {
                "title": "Import CSS files",
                "content": dedent("""\
                    // Add these imports to your main CSS file or component
                    import "slick-carousel/slick/slick.css";
                    import "slick-carousel/slick/slick-theme.css";"""),
            },
            _ts_types("@types/react-slick"),
        ],
    },
]


# Fallback entries added when the user selects nothing.
_RAW_BASELINE: list[dict] = [
    {"name": "node", "type": "prod"},
    {"name": "nodemon", "type": "dev"},
]


def build_catalog(raw: list[dict]) -> tuple[PackageDescriptor, ...]:
    """Validate raw entries into an immutable descriptor table."""
    return tuple(PackageDescriptor.model_validate(entry) for entry in raw)


CATALOG: tuple[PackageDescriptor, ...] = build_catalog(_RAW_CATALOG)
BASELINE_PACKAGES: tuple[PackageDescriptor, ...] = build_catalog(_RAW_BASELINE)


def get_descriptor(
    name: str,
    catalog: tuple[PackageDescriptor, ...] = CATALOG,
) -> PackageDescriptor | None:
    """First catalog entry with this name, or None."""
    for descriptor in catalog:
        if descriptor.name == name:
            return descriptor
    return None
