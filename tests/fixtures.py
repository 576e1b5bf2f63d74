"""Schema used across tests."""

SDL = '''
type Query {
  "List all users"
  users(limit: Int, role: Role): [User]
  "Fetch one user"
  user("User identifier" id: ID!): User
  viewer: User
  oldUsers: [User] @deprecated(reason: "Use users")
}

type Mutation {
  "Create a user"
  createUser("Email address" email: String!, name: String, age: Int): User
  deleteUser(id: ID!, hard: Boolean!): Boolean
  reset: Boolean
}

enum Role {
  ADMIN
  MEMBER
}

type User {
  id: ID!
  name: String
  email: String
  age: Int
}
'''
