import os
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import requests

API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:8000")

# Create a directory to save the charts
CHART_DIR = Path(__file__).parent / "charts"


# getting data
def fetch_data(endpoint):
    """function to fetch data from our API."""
    try:
        url = f"{API_BASE_URL}{endpoint}"
        print(f"Fetching data from: {url}")
        response = requests.get(url, timeout=30)
        response.raise_for_status()  # Raises an HTTPError for bad responses
        return response.json()
    except requests.exceptions.RequestException as e:
        print(f"Error fetching data from {endpoint}: {e}")
        return None


def users_by_domain(users):
    """Counts users per email domain, largest domain first."""
    if not users:
        return pd.DataFrame(columns=['Domain', 'User Count'])

    df = pd.DataFrame(users)
    df['Domain'] = df['email'].str.split('@').str[-1].str.lower()
    counts = df.groupby('Domain').size().reset_index(name='User Count')
    return counts.sort_values(by=['User Count', 'Domain'], ascending=[False, True]).reset_index(drop=True)


def plot_users_by_domain(counts, chart_dir=CHART_DIR):
    """Creates a bar chart of how many users each email domain has."""
    if counts.empty:
        print("No users to plot.")
        return None

    chart_dir.mkdir(exist_ok=True)
    fig = go.Figure(data=[go.Bar(x=counts['Domain'], y=counts['User Count'], marker_color='royalblue')])
    fig.update_layout(
        title_text='Users per Email Domain',
        xaxis_title='Domain',
        yaxis_title='Number of Users',
        template='plotly_white'
    )
    file_name = chart_dir / "users_by_domain.html"
    fig.write_html(file_name)
    print(f"Saved users by domain chart to {file_name}")
    return file_name


def main():
    """Main function to run the report script."""
    print("\n<-----Fetching Users----->")
    users = fetch_data("/users")
    if users is None:
        print("Could not fetch users. Exiting.")
        return

    print(f"Fetched {len(users)} users.")
    counts = users_by_domain(users)
    print(counts.to_string(index=False))
    plot_users_by_domain(counts)


if __name__ == "__main__":
    main()
