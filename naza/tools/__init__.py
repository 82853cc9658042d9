"""Command-line helpers: header and notice adders, capital-run finder, CSV bar chart, pstack diff, build info."""