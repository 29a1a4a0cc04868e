"""Print the sidebar menu each role gets from the configured navigation policy."""
from portal.nav_access import NavigationPolicy, ROLES, landing_path


def main():
    policy = NavigationPolicy()
    for role in ROLES:
        print(f'{role} (landing {landing_path(role)}):')
        for item in policy.filter_menu(role):
            print(f'  - {item.id:<15} {item.label:<16} {item.path}')


if __name__ == '__main__':
    main()
