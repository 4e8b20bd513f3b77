from locust import HttpUser, task, between
import csv
import os
import random

# Accounts to query: accounts.csv (column "public_key") or ACCOUNTS env (comma-separated)
accounts = []
if os.path.exists("accounts.csv"):
    with open("accounts.csv") as f:
        for row in csv.DictReader(f):
            accounts.append(row["public_key"])
if not accounts:
    accounts = [a.strip() for a in os.getenv("ACCOUNTS", "").split(",") if a.strip()]
if not accounts:
    # USDC issuer: always funded on mainnet
    accounts = ["GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"]


class MerchantDashboardUser(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def account(self):
        self.client.get("/api/account", params={"publicKey": random.choice(accounts)})

    @task(2)
    def payments(self):
        self.client.get(
            "/api/payments",
            params={"publicKey": random.choice(accounts), "limit": 10},
        )

    @task(1)
    def analytics(self):
        self.client.get("/api/analytics", params={"publicKey": random.choice(accounts)})
